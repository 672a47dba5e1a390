"""headers.json (de)serialization for the metadata index"""

from pathlib import Path

from pydantic import ValidationError

from hexosrc.core.errors import IndexFormatError
from hexosrc.core.models import MetadataIndex


def dump_index(index: MetadataIndex) -> str:
    """Return the index as indented JSON using the on-disk field names."""
    return index.model_dump_json(indent=4, by_alias=True)


def save_index(index: MetadataIndex, path: Path) -> Path:
    """Write the index to path. Write errors propagate."""
    path.write_text(dump_index(index) + "\n", encoding="utf-8")
    return path


def load_index(path: Path) -> MetadataIndex:
    """Read and validate headers.json. Any problem is an IndexFormatError."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise IndexFormatError(f"metadata index {path} does not exist") from e
    except (OSError, UnicodeDecodeError) as e:
        raise IndexFormatError(f"cannot read metadata index {path}: {e}") from e
    try:
        return MetadataIndex.model_validate_json(raw)
    except ValidationError as e:
        raise IndexFormatError(f"invalid metadata index {path}: {e}") from e
