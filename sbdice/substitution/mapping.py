"""Placeholder mapping: build, serialize and load."""

import json
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from sbdice.errors import MappingError
from sbdice.models.mapping import PlaceholderMapping


def build_mapping(record: Sequence[str]) -> dict[str, str]:
    """Turn the ordered record of originals into {"0": record[0], ...}.

    Keys are inserted in increasing numeric order. An empty record gives an
    empty dict.
    """
    return {str(index): value for index, value in enumerate(record)}


def dump_mapping(mapping: dict[str, str]) -> str:
    """Serialize a mapping as indented JSON, non-ASCII text kept as is."""
    ordered = dict(sorted(mapping.items(), key=lambda item: int(item[0])))
    return json.dumps(ordered, indent=2, ensure_ascii=False)


def load_mapping(path: Path) -> dict[str, str]:
    """Read and validate a mapping file.

    Raises:
        MappingError: If the file is not valid JSON or not a well-formed
            placeholder mapping.
        OSError: If the file cannot be read.
    """
    text = path.read_text(encoding="utf-8")
    try:
        return PlaceholderMapping.model_validate_json(text).root
    except ValidationError as e:
        raise MappingError(f"Invalid mapping file {path}: {e}") from e
