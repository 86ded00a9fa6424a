"""
Interactive console: ClinicService + in-memory store.
Run: python -m cli (from repo root, with .env or env vars set).
"""
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Repo root: from src/cli/__main__.py go up to repo root
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent
for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
    if path.exists():
        load_dotenv(path)
        break

from medbook.application import ClinicService, CommandFailed  # noqa: E402
from medbook.config import load_settings  # noqa: E402
from medbook.infrastructure import CommandParser, InMemoryClinicStore, load_seed  # noqa: E402

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PROMPT = "medbook> "
PATIENT_VIEW_WORDS = ("list", "find")
APPOINTMENT_VIEW_WORDS = ("a-list", "a-find")


def _numbered(records) -> str:
    if not records:
        return "  (none)"
    return "\n".join(f"  {i}. {record}" for i, record in enumerate(records, start=1))


def respond(service: ClinicService, line: str) -> tuple[str, bool]:
    """Run one line and return (text to print, whether to exit)."""
    result = service.run(line)
    if isinstance(result, CommandFailed):
        return result.message, False

    text = result.feedback
    word = line.strip().split(" ", 1)[0].lower()
    if word in PATIENT_VIEW_WORDS:
        text += "\n" + _numbered(service.store.filtered_patients())
    elif word in APPOINTMENT_VIEW_WORDS:
        text += "\n" + _numbered(service.store.filtered_appointments())
    return text, result.exit


def main(stdin=None, stdout=None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    try:
        settings = load_settings()
    except ValueError as exc:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error("Invalid configuration: %s", exc)
        return 1
    logging.basicConfig(format=LOG_FORMAT, level=getattr(logging, settings.log_level))

    store = InMemoryClinicStore()
    if settings.seed_path is not None:
        try:
            load_seed(settings.seed_path, store, phone_region=settings.phone_region)
        except (OSError, ValueError) as exc:
            logger.error("Could not load seed data from %s: %s", settings.seed_path, exc)
            return 1
    service = ClinicService(store, CommandParser(phone_region=settings.phone_region))
    logger.info("Ready (phone region %s)", settings.phone_region)

    interactive = stdin.isatty()
    while True:
        if interactive:
            stdout.write(PROMPT)
            stdout.flush()
        line = stdin.readline()
        if not line:
            break
        if not line.strip():
            continue
        text, should_exit = respond(service, line)
        stdout.write(text + "\n")
        if should_exit:
            break
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
