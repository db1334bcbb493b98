"""Run configuration.

Configuration via environment variables (a .env file is honored):
- SBDICE_LOG_LEVEL: Logger level (default: INFO)
- SBDICE_DISABLE_PROGRESS: Set to 1 to turn off progress bars
- SBDICE_WORKERS: Worker processes for directory runs (default: 1)
"""

import os
from dataclasses import dataclass
from pathlib import Path


def _get_workers() -> int:
    """Worker count from environment (read at call time, not import time)."""
    try:
        return max(1, int(os.getenv("SBDICE_WORKERS", "1")))
    except ValueError:
        return 1


@dataclass
class DiceConfig:
    """Options shared by the dice, restore and batch operations."""

    strip_comments: bool = True
    output_dir: Path | None = None  # Defaults to the input file's directory
    code_suffix: str = "_r"
    mapping_suffix: str = "_s"
    restore_suffix: str = "_o"
    workers: int = 1

    @classmethod
    def from_env(cls, **overrides) -> "DiceConfig":
        """Build a config from the environment, then apply explicit overrides.

        Overrides whose value is None are ignored.
        """
        config = cls(workers=_get_workers())
        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)
        return config

    def code_path(self, source: Path) -> Path:
        """Where the rewritten source for `source` goes."""
        return self._target_dir(source) / f"{source.stem}{self.code_suffix}{source.suffix}"

    def mapping_path(self, source: Path) -> Path:
        """Where the mapping JSON for `source` goes."""
        return self._target_dir(source) / f"{source.stem}{self.mapping_suffix}.json"

    def restore_path(self, rewritten: Path) -> Path:
        """Where the restored source for a rewritten file goes."""
        stem = rewritten.stem
        if self.code_suffix and stem.endswith(self.code_suffix):
            stem = stem[: -len(self.code_suffix)]
        return self._target_dir(rewritten) / f"{stem}{self.restore_suffix}{rewritten.suffix}"

    def is_output_file(self, path: Path) -> bool:
        """Whether a path looks like a file this tool wrote."""
        suffixes = tuple(s for s in (self.code_suffix, self.restore_suffix) if s)
        return bool(suffixes) and path.stem.endswith(suffixes)

    def _target_dir(self, source: Path) -> Path:
        return self.output_dir if self.output_dir is not None else source.parent
