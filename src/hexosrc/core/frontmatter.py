"""Front-matter block parsing and serialization.

A header block sits at the top of a content file between two delimiter lines
(exactly ``---``). Each line inside is ``key: value``; the value is everything
after the first colon. Keys and values are trimmed of whitespace and of one
layer of wrapping double quotes. Everything after the closing delimiter is the
body and is passed through byte-for-byte, line endings included.
"""

import json
import shutil
from pathlib import Path
from typing import BinaryIO, Iterable, Mapping

from hexosrc.core.errors import FrontMatterError


DELIMITER = "---"
QUOTED_KEYS = ("title",)


def _is_delimiter(line: bytes) -> bool:
    return line.rstrip() == DELIMITER.encode()


def _unquote(text: str) -> str:
    """Trim whitespace, then decode a double-quoted string.

    Quoted values written by quote() are JSON-escaped; anything that does not
    decode loses just its wrapping pair of quotes.
    """
    text = text.strip()
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        try:
            decoded = json.loads(text)
        except ValueError:
            decoded = None
        text = decoded if isinstance(decoded, str) else text[1:-1]
    return text


def parse_header_line(line: str) -> tuple[str, str]:
    """Split 'key: value' on the first colon. Raises FrontMatterError without one."""
    key, sep, value = line.partition(":")
    if not sep:
        raise FrontMatterError(f"header line has no ':' separator: {line.strip()!r}")
    return _unquote(key), _unquote(value)


def read_header(stream: BinaryIO) -> tuple[dict[str, str], bytes]:
    """Consume the header block from stream.

    Returns (metadata, pending) where pending is body content already read
    while looking for the block (non-empty only when the file has no header).
    The stream is left positioned at the first unread body byte.
    """
    leading = []
    line = stream.readline()
    while line and not line.strip():
        leading.append(line)
        line = stream.readline()
    if not line or not _is_delimiter(line):
        return {}, b"".join(leading) + line

    metadata: dict[str, str] = {}
    lineno = len(leading) + 1
    while True:
        line = stream.readline()
        lineno += 1
        if not line:
            raise FrontMatterError("header block is not closed")
        if _is_delimiter(line):
            return metadata, b""
        try:
            text = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FrontMatterError(f"header line {lineno} is not valid UTF-8") from e
        if not text.strip():
            continue
        key, value = parse_header_line(text)
        metadata[key] = value


def extract_frontmatter(src: Path, dst: Path) -> dict[str, str]:
    """Read the header of src and write its body alone to dst.

    The header is fully parsed before dst is opened, so a malformed file never
    leaves a partial body behind. Read errors on src surface as FrontMatterError;
    write errors on dst propagate unchanged.
    """
    try:
        stream = src.open("rb")
    except OSError as e:
        raise FrontMatterError(f"cannot read {src}: {e}") from e
    with stream:
        try:
            metadata, pending = read_header(stream)
        except OSError as e:
            raise FrontMatterError(f"cannot read {src}: {e}") from e
        with dst.open("wb") as out:
            out.write(pending)
            shutil.copyfileobj(stream, out)
    return metadata


def quote(value: str) -> str:
    """Render value as a double-quoted string with JSON escaping."""
    return json.dumps(value, ensure_ascii=False)


def format_frontmatter(metadata: Mapping[str, str], quoted: Iterable[str] = QUOTED_KEYS) -> str:
    """Serialize metadata into a delimited header block, in mapping order."""
    quoted = set(quoted)
    lines = [DELIMITER]
    for key, value in metadata.items():
        lines.append(f"{key}: {quote(value) if key in quoted else value}")
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n"


def write_frontmatter(out: BinaryIO, metadata: Mapping[str, str], quoted: Iterable[str] = QUOTED_KEYS) -> None:
    """Write the header block for metadata to an open binary stream."""
    out.write(format_frontmatter(metadata, quoted).encode("utf-8"))
