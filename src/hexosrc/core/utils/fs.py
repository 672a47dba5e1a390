"""Filesystem helpers: subtree duplication, extension stripping, directory wiping"""

import shutil
from pathlib import Path
from typing import Iterable


def strip_ext(name: str) -> str:
    """Return name without its last extension ('a.b.md' -> 'a.b')."""
    return Path(name).stem


def copy_tree(src: Path, dst: Path, exclude: Iterable[str] = ()) -> bool:
    """Copy the directory src into dst byte-for-byte, merging into an existing dst.

    A missing (or non-directory) src is treated as empty and nothing is created.
    Top-level entries named in exclude are left out. Returns True if anything was copied.
    """
    if not src.is_dir():
        return False
    skip = set(exclude)
    dst.mkdir(parents=True, exist_ok=True)
    copied = False
    for item in sorted(src.iterdir()):
        if item.name in skip:
            continue
        target = dst / item.name
        if item.is_dir():
            shutil.copytree(item, target, dirs_exist_ok=True)
        else:
            shutil.copy2(item, target)
        copied = True
    return copied


def clear_dir(path: Path) -> None:
    """Remove every direct child of path, recursing into directories."""
    for item in path.iterdir():
        if item.is_dir() and not item.is_symlink():
            shutil.rmtree(item)
        else:
            item.unlink()
