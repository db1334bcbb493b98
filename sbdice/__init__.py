"""sbdice - string literal placeholder substitution for TypeScript/JavaScript."""

# Load .env so SBDICE_LOG_LEVEL, SBDICE_WORKERS, etc. are set for any entry
# point (CLI, pytest, scripts) before sbdice.logging reads them.
from dotenv import load_dotenv

load_dotenv()

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"

from sbdice.pipeline import (  # noqa: E402
    DiceResult,
    RestoreResult,
    dice_directory,
    dice_file,
    dice_source,
    restore_file,
    restore_source,
)

__all__ = [
    "DiceResult",
    "RestoreResult",
    "__version__",
    "dice_directory",
    "dice_file",
    "dice_source",
    "restore_file",
    "restore_source",
]
