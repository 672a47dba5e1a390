"""Data models for the metadata index and run reports"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ContentRecord(BaseModel):
    """One post or page: its file (or page directory) name plus header fields."""
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="filename")
    metadata:  dict[str, str] = Field(default_factory=dict, alias="header")   # insertion-ordered


class MetadataIndex(BaseModel):
    """Contents of headers.json: the bridge between init and convert."""
    posts: list[ContentRecord] = Field(default_factory=list)
    pages: list[ContentRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_names(self) -> "MetadataIndex":
        for group in ("posts", "pages"):
            counts = Counter(r.file_name for r in getattr(self, group))
            dupes = sorted(name for name, n in counts.items() if n > 1)
            if dupes:
                raise ValueError(f"duplicate {group} filename(s): {', '.join(dupes)}")
        return self


@dataclass(frozen=True)
class SkipReason:
    """A record that was left for the operator to handle by hand."""
    path:   Path
    reason: str

    def __str__(self) -> str:
        return f'"{self.path}": {self.reason}'


@dataclass
class RunReport:
    """Outcome of init/convert: processed record names, skips, and notes."""
    records: list[str] = field(default_factory=list)
    skipped: list[SkipReason] = field(default_factory=list)
    notes:   list[str] = field(default_factory=list)
