"""Root test configuration: native source tree and fake history fixtures"""

import os
from pathlib import Path

import pytest

from hexosrc.core.errors import HistoryUnavailable


HELLO_MD = (
    b'---\n'
    b'title: "Hello World"\n'
    b'date: 2020-01-01 10:00:00\n'
    b'tags: [a, b]\n'
    b'---\n'
    b'# Hello\r\n'
    b'\r\n'
    b'Body text with a --- rule.\n'
)

BAD_MD = b"---\ntitle: Bad\nthis line has no separator\n---\nbody\n"

PLAIN_MD = b"No header here.\nSecond line.\n"

ABOUT_MD = b"---\ntitle: About\nlayout: page\n---\nAbout me.\n"


class FakeHistory:
    """HistoryProvider returning canned timestamps; paths missing from stamps have no history."""

    def __init__(self, stamps: dict[str, list[str]] = None, default: list[str] = None):
        self.stamps = stamps or {}
        self.default = default
        self.calls: list[Path] = []

    def history(self, path: Path) -> list[str]:
        self.calls.append(Path(path))
        found = self.stamps.get(Path(path).as_posix(), self.default)
        if not found:
            raise HistoryUnavailable(f"no commit history for {path}")
        return list(found)


@pytest.fixture(name="fake_history")
def fake_history_fixture():
    """Factory for FakeHistory instances."""
    return FakeHistory


@pytest.fixture(name="native_src")
def native_src_fixture(tmp_path) -> Path:
    """A small hexo source tree: three posts (one malformed), one page, one non-page dir."""
    src = tmp_path / "native"
    posts = src / "_posts"
    posts.mkdir(parents=True)
    (posts / "hello.md").write_bytes(HELLO_MD)
    (posts / "bad.md").write_bytes(BAD_MD)
    (posts / "plain.md").write_bytes(PLAIN_MD)
    (posts / "hello").mkdir()
    (posts / "hello" / "img.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x01")
    (posts / "hello" / "nested").mkdir()
    (posts / "hello" / "nested" / "deep.txt").write_text("deep\n")

    about = src / "about"
    about.mkdir()
    (about / "index.md").write_bytes(ABOUT_MD)
    (about / "photo.jpg").write_bytes(b"\xff\xd8\xff\xe0")

    (src / "notapage").mkdir()
    (src / "notapage" / "readme.txt").write_text("not a page\n")
    (src / "favicon.ico").write_bytes(b"\x00\x00")
    return src


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep a developer's hexosrc.yaml or HEXOSRC_* variables out of tests."""
    for name in list(os.environ):
        if name.startswith("HEXOSRC_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
