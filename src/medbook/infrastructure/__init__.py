"""Infrastructure layer: concrete implementations of application ports."""

from medbook.infrastructure.command_parser import CommandParser, tokenize, usage_text
from medbook.infrastructure.memory_store import InMemoryClinicStore
from medbook.infrastructure.phone import is_supported_region, normalize_phone
from medbook.infrastructure.seed import load_seed

__all__ = [
    "CommandParser",
    "InMemoryClinicStore",
    "is_supported_region",
    "load_seed",
    "normalize_phone",
    "tokenize",
    "usage_text",
]
