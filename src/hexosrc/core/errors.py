"""Exception taxonomy: run-level preconditions vs. per-record failures"""


class HexoSourceError(Exception):
    """Base class for every error raised by hexosrc."""


# --- preconditions: abort the whole run ---

class SourceDirError(HexoSourceError):
    """Source root is missing or is not a directory."""


class DestinationError(HexoSourceError):
    """Destination root cannot be used (a file, or the source itself)."""


class DestinationNotEmptyError(DestinationError):
    """Destination root has content and --force was not given."""


class IndexFormatError(HexoSourceError):
    """headers.json is missing, unreadable, or not a valid metadata index."""


# --- per-record: orchestrators skip the record and continue ---

class RecordError(HexoSourceError):
    """A single post or page could not be processed."""


class FrontMatterError(RecordError):
    """Header block is malformed."""


class MissingContentError(RecordError):
    """Expected content file does not exist."""


class AssetCopyError(RecordError):
    """Asset directory could not be duplicated."""


class HistoryUnavailable(RecordError):
    """Version-control history for a path is missing or could not be read."""
