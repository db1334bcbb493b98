"""Pydantic models for sbdice outputs and reports."""

import re
from datetime import datetime

from pydantic import BaseModel, Field, RootModel, model_validator

_INDEX_KEY = re.compile(r"0|[1-9][0-9]*")


class PlaceholderMapping(RootModel[dict[str, str]]):
    """Placeholder index (as a decimal string) to original string value.

    Keys must be "0" .. "N-1" with no gaps and no leading zeros.
    """

    @model_validator(mode="after")
    def check_keys(self) -> "PlaceholderMapping":
        for key in self.root:
            if not _INDEX_KEY.fullmatch(key):
                raise ValueError(f"Mapping key {key!r} is not a decimal index")
        indexes = sorted(int(key) for key in self.root)
        if indexes != list(range(len(indexes))):
            missing = sorted(set(range(len(indexes))) - set(indexes))
            raise ValueError(f"Mapping keys are not contiguous from 0 (missing: {missing[:5]})")
        return self


class DiceReport(BaseModel):
    """Result of substituting one file."""

    source: str = Field(description="Input file path")
    code_path: str = Field(description="Rewritten source path")
    mapping_path: str = Field(description="Mapping JSON path")
    literal_count: int = Field(description="Number of string literals substituted")
    language: str = Field(description="Grammar used to parse the input")


class RestoreReport(BaseModel):
    """Result of restoring one file from its mapping."""

    source: str = Field(description="Rewritten input file path")
    mapping_path: str = Field(description="Mapping JSON path")
    output_path: str = Field(description="Restored source path")
    restored_count: int = Field(description="Number of literals given back their value")
    unknown_placeholders: list[str] = Field(
        default_factory=list, description="Literal values absent from the mapping"
    )
    unused_keys: list[str] = Field(
        default_factory=list, description="Mapping keys with no literal in the file"
    )


class BatchReport(BaseModel):
    """Result of substituting every supported file below a directory."""

    directory: str = Field(description="Root directory that was processed")
    generated_at: datetime = Field(default_factory=lambda: datetime.now(tz=None))
    file_count: int = Field(default=0, description="Files attempted")
    literal_count: int = Field(default=0, description="Literals substituted across all files")
    files: list[DiceReport] = Field(default_factory=list)
    errors: list[dict] = Field(
        default_factory=list, description="Per-file failures, {'file': ..., 'error': ...}"
    )
