"""Directory orchestration for both directions.

init:    native layout (inline headers) -> custom layout (body-only files + headers.json)
convert: custom layout -> native layout, optionally autofilling missing header fields

Per-record problems are collected as SkipReason entries and the run continues;
precondition failures and destination write errors propagate to the caller.
"""

import logging
from pathlib import Path

from hexosrc.config import Settings
from hexosrc.core.autofill import autofill as autofill_header
from hexosrc.core.errors import AssetCopyError, MissingContentError, RecordError
from hexosrc.core.frontmatter import extract_frontmatter, write_frontmatter
from hexosrc.core.guard import check_destination, check_source
from hexosrc.core.history import GitHistory, HistoryProvider
from hexosrc.core.index import load_index, save_index
from hexosrc.core.models import ContentRecord, MetadataIndex, RunReport, SkipReason
from hexosrc.core.utils.fs import copy_tree, strip_ext


logger = logging.getLogger(__name__)


def _skip(skipped: list[SkipReason], path: Path, err: Exception) -> None:
    logger.warning("skipping %s: %s", path, err)
    skipped.append(SkipReason(path=path, reason=str(err)))


def _copy_assets(src: Path, dst: Path, exclude: tuple[str, ...] = ()) -> None:
    try:
        copy_tree(src, dst, exclude=exclude)
    except OSError as e:
        raise AssetCopyError(f"copying asset directory {src} failed: {e}") from e


def _check_name(name: str) -> None:
    """Record names are single path components under their parent directory."""
    if not name or name in (".", "..") or Path(name).name != name:
        raise RecordError(f"invalid record file name {name!r}")


# --- init ---

def init_posts(src: Path, dst: Path, settings: Settings) -> tuple[list[ContentRecord], list[SkipReason]]:
    """Split every post under src/_posts into a body file and a record.

    Directories are asset folders and are only copied alongside their post.
    A missing posts directory yields no records.
    """
    src_posts = src / settings.posts_dir
    dst_posts = dst / settings.posts_dir
    dst_posts.mkdir(parents=True, exist_ok=True)

    records: list[ContentRecord] = []
    skipped: list[SkipReason] = []
    if not src_posts.is_dir():
        return records, skipped

    for item in sorted(src_posts.iterdir()):
        if item.is_dir():
            continue
        try:
            header = extract_frontmatter(item, dst_posts / item.name)
            stem = strip_ext(item.name)
            _copy_assets(src_posts / stem, dst_posts / stem)
        except RecordError as e:
            _skip(skipped, item, e)
            continue
        logger.debug("init post %s (%d header fields)", item.name, len(header))
        records.append(ContentRecord(file_name=item.name, metadata=header))
    return records, skipped


def init_pages(src: Path, dst: Path, settings: Settings) -> tuple[list[ContentRecord], list[SkipReason]]:
    """Split every page directory (a top-level dir holding index.md) of src.

    Everything else in the page directory is copied as-is.
    """
    records: list[ContentRecord] = []
    skipped: list[SkipReason] = []

    for item in sorted(src.iterdir()):
        if not item.is_dir() or item.name == settings.posts_dir:
            continue
        src_index = item / settings.page_index
        if not src_index.is_file():
            _skip(skipped, item, MissingContentError(f"not a valid page directory, {settings.page_index} not found"))
            continue
        dst_page = dst / item.name
        dst_page.mkdir(parents=True, exist_ok=True)
        try:
            header = extract_frontmatter(src_index, dst_page / settings.page_index)
            _copy_assets(item, dst_page, exclude=(settings.page_index,))
        except RecordError as e:
            if not any(dst_page.iterdir()):
                dst_page.rmdir()
            _skip(skipped, item, e)
            continue
        logger.debug("init page %s (%d header fields)", item.name, len(header))
        records.append(ContentRecord(file_name=item.name, metadata=header))
    return records, skipped


def run_init(src: Path, dst: Path, settings: Settings, force: bool = False) -> RunReport:
    """Convert the native tree at src into the custom layout at dst."""
    src, dst = Path(src), Path(dst)
    check_source(src)
    report = RunReport()
    if check_destination(dst, force=force, src=src):
        report.notes.append(f"destination directory {dst} did not exist and was created")

    posts, skipped_posts = init_posts(src, dst, settings)
    pages, skipped_pages = init_pages(src, dst, settings)
    save_index(MetadataIndex(posts=posts, pages=pages), dst / settings.headers_file)

    report.records = [r.file_name for r in posts + pages]
    report.skipped = skipped_posts + skipped_pages
    return report


# --- convert ---

def _read_body(path: Path) -> bytes:
    if not path.is_file():
        raise MissingContentError(f"content file {path} not found")
    try:
        return path.read_bytes()
    except OSError as e:
        raise MissingContentError(f"cannot read content file {path}: {e}") from e


def _write_native(dst: Path, header: dict[str, str], body: bytes) -> None:
    """Write header block followed by the original body. Errors propagate."""
    dst.parent.mkdir(parents=True, exist_ok=True)
    with dst.open("wb") as out:
        write_frontmatter(out, header)
        out.write(body)


def convert_posts(
    src: Path,
    dst: Path,
    records: list[ContentRecord],
    settings: Settings,
    history: HistoryProvider = None,
    ) -> tuple[list[str], list[SkipReason]]:
    """Write a native post for every record; history enables autofill."""
    src_posts = src / settings.posts_dir
    dst_posts = dst / settings.posts_dir
    dst_posts.mkdir(parents=True, exist_ok=True)

    done: list[str] = []
    skipped: list[SkipReason] = []
    for record in records:
        src_path = src_posts / record.file_name
        try:
            _check_name(record.file_name)
            body = _read_body(src_path)
            header = dict(record.metadata)
            if history is not None:
                header = autofill_header(
                    header, record.file_name, Path(settings.posts_dir) / record.file_name, history,
                    body=body, length=settings.description_length, suffix=settings.description_suffix,
                )
        except RecordError as e:
            _skip(skipped, src_path, e)
            continue

        _write_native(dst_posts / record.file_name, header, body)

        stem = strip_ext(record.file_name)
        try:
            _copy_assets(src_posts / stem, dst_posts / stem)
        except AssetCopyError as e:
            _skip(skipped, src_path, e)
            continue
        logger.debug("convert post %s", record.file_name)
        done.append(record.file_name)
    return done, skipped


def convert_pages(
    src: Path,
    dst: Path,
    records: list[ContentRecord],
    settings: Settings,
    history: HistoryProvider = None,
    ) -> tuple[list[str], list[SkipReason]]:
    """Write a native index file, plus co-located assets, for every page record."""
    done: list[str] = []
    skipped: list[SkipReason] = []
    for record in records:
        src_page = src / record.file_name
        try:
            _check_name(record.file_name)
            body = _read_body(src_page / settings.page_index)
            header = dict(record.metadata)
            if history is not None:
                header = autofill_header(
                    header, record.file_name, Path(record.file_name) / settings.page_index, history, keep_ext=True,
                )
        except RecordError as e:
            _skip(skipped, src_page, e)
            continue

        dst_page = dst / record.file_name
        _write_native(dst_page / settings.page_index, header, body)

        try:
            _copy_assets(src_page, dst_page, exclude=(settings.page_index,))
        except AssetCopyError as e:
            _skip(skipped, src_page, e)
            continue
        logger.debug("convert page %s", record.file_name)
        done.append(record.file_name)
    return done, skipped


def run_convert(
    src: Path,
    dst: Path,
    settings: Settings,
    force: bool = False,
    autofill: bool = None,
    history: HistoryProvider = None,
    ) -> RunReport:
    """Rebuild the native tree at dst from the custom layout at src.

    autofill defaults to settings.autofill; history defaults to git run in src.
    """
    src, dst = Path(src), Path(dst)
    check_source(src)
    index = load_index(src / settings.headers_file)
    report = RunReport()
    if check_destination(dst, force=force, src=src):
        report.notes.append(f"destination directory {dst} did not exist and was created")

    if autofill is None:
        autofill = settings.autofill
    if not autofill:
        history = None
    elif history is None:
        history = GitHistory(src, binary=settings.git_binary, date_format=settings.date_format)

    posts, skipped_posts = convert_posts(src, dst, index.posts, settings, history)
    pages, skipped_pages = convert_pages(src, dst, index.pages, settings, history)

    report.records = posts + pages
    report.skipped = skipped_posts + skipped_pages
    return report
