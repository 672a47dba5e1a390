"""Derive missing title/date/updated/description header fields"""

from pathlib import Path

from hexosrc.core.frontmatter import quote
from hexosrc.core.history import HistoryProvider
from hexosrc.core.utils.fs import strip_ext


def fill_title(metadata: dict[str, str], file_name: str, keep_ext: bool = False) -> None:
    """Set title from file_name minus its extension. The writer quotes it.

    keep_ext is for page directory names, which have no extension to strip.
    """
    if "title" not in metadata:
        metadata["title"] = file_name if keep_ext else strip_ext(file_name)


def fill_dates(metadata: dict[str, str], path: Path, history: HistoryProvider) -> None:
    """Set date (earliest commit) and updated (latest commit) from history.

    History is only consulted when one of the two is missing.
    """
    if "date" in metadata and "updated" in metadata:
        return
    stamps = history.history(path)
    metadata.setdefault("date", stamps[-1])
    metadata.setdefault("updated", stamps[0])


def summarize(body: bytes, length: int = 350, suffix: str = " ......") -> str:
    """Plain-text teaser from the first length bytes of body, suffix appended."""
    text = body[:length].decode("utf-8", errors="ignore")
    text = text.replace("*", "").replace("#", "")
    text = text.replace("\r\n", " ").replace("\n", " ")
    return text.strip() + suffix


def fill_description(metadata: dict[str, str], body: bytes, length: int = 350, suffix: str = " ......") -> None:
    """Set description to a quoted summary of body."""
    if "description" not in metadata:
        metadata["description"] = quote(summarize(body, length, suffix))


def autofill(
    metadata: dict[str, str],
    file_name: str,
    path: Path,
    history: HistoryProvider,
    body: bytes = None,
    length: int = 350,
    suffix: str = " ......",
    keep_ext: bool = False,
    ) -> dict[str, str]:
    """Return a copy of metadata with missing fields filled.

    description is only filled when body is given (posts); keep_ext keeps
    the whole name as title (pages). Raises
    HistoryUnavailable if dates are needed and history is empty.
    """
    filled = dict(metadata)
    fill_title(filled, file_name, keep_ext)
    fill_dates(filled, path, history)
    if body is not None:
        fill_description(filled, body, length, suffix)
    return filled
