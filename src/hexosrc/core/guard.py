"""Precondition checks on the source and destination roots"""

import logging
from pathlib import Path

from hexosrc.core.errors import DestinationError, DestinationNotEmptyError, SourceDirError
from hexosrc.core.utils.fs import clear_dir


logger = logging.getLogger(__name__)


def check_source(src: Path) -> None:
    """Raise SourceDirError unless src is a readable directory."""
    if not src.exists():
        raise SourceDirError(f"source directory {src} does not exist")
    if not src.is_dir():
        raise SourceDirError(f"source {src} is not a directory")
    try:
        next(src.iterdir(), None)
    except OSError as e:
        raise SourceDirError(f"cannot read source directory {src}: {e}") from e


def check_destination(dst: Path, force: bool = False, src: Path = None) -> bool:
    """Make dst an empty directory, or fail.

    Missing dst is created (returns True). A non-empty dst is wiped only when
    force is set; otherwise DestinationNotEmptyError is raised and nothing is touched.
    """
    if src is not None and dst.exists() and dst.resolve() == src.resolve():
        raise DestinationError(f"destination {dst} is the source directory")
    if not dst.exists():
        dst.mkdir(parents=True)
        logger.warning("destination directory %s does not exist and was created", dst)
        return True
    if not dst.is_dir():
        raise DestinationError(f"destination {dst} is not a directory")
    if any(dst.iterdir()):
        if not force:
            raise DestinationNotEmptyError(
                f"destination directory {dst} is not empty, use --force or -f to overwrite it"
            )
        logger.info("clearing destination directory %s", dst)
        clear_dir(dst)
    return False
