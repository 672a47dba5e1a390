"""Unit tests for core/index.py and the index models"""

import json

import pytest

from hexosrc.core.errors import IndexFormatError
from hexosrc.core.index import dump_index, load_index, save_index
from hexosrc.core.models import ContentRecord, MetadataIndex


def _index() -> MetadataIndex:
    return MetadataIndex(
        posts=[
            ContentRecord(file_name="b.md", metadata={"title": "B", "date": "2020"}),
            ContentRecord(file_name="a.md", metadata={"title": "标题"}),
        ],
        pages=[ContentRecord(file_name="about", metadata={})],
    )


def test_dump_index_uses_on_disk_names():
    """headers.json uses 'filename' and 'header' keys with 4-space indentation."""
    text = dump_index(_index())
    data = json.loads(text)
    assert data["posts"][0] == {"filename": "b.md", "header": {"title": "B", "date": "2020"}}
    assert data["pages"] == [{"filename": "about", "header": {}}]
    assert '\n    "posts": [' in text


def test_dump_index_keeps_non_ascii():
    assert "标题" in dump_index(_index())


def test_save_then_load_preserves_order(tmp_path):
    """Record order and header key order survive a save/load cycle."""
    path = save_index(_index(), tmp_path / "headers.json")
    loaded = load_index(path)
    assert [r.file_name for r in loaded.posts] == ["b.md", "a.md"]
    assert list(loaded.posts[0].metadata) == ["title", "date"]
    assert loaded == _index()


def test_load_index_accepts_aliases(tmp_path):
    path = tmp_path / "headers.json"
    path.write_text('{"posts": [{"filename": "x.md", "header": {"k": "v"}}], "pages": []}')
    index = load_index(path)
    assert index.posts[0].file_name == "x.md"
    assert index.posts[0].metadata == {"k": "v"}


def test_load_index_missing(tmp_path):
    with pytest.raises(IndexFormatError, match="does not exist"):
        load_index(tmp_path / "headers.json")


def test_load_index_malformed_json(tmp_path):
    """Malformed JSON is an IndexFormatError."""
    path = tmp_path / "headers.json"
    path.write_text('{"posts": [')
    with pytest.raises(IndexFormatError, match="invalid metadata index"):
        load_index(path)


def test_load_index_non_string_value(tmp_path):
    """Header values must be strings."""
    path = tmp_path / "headers.json"
    path.write_text('{"posts": [{"filename": "x.md", "header": {"n": 1}}], "pages": []}')
    with pytest.raises(IndexFormatError):
        load_index(path)


def test_load_index_duplicate_filenames(tmp_path):
    """Two posts with the same filename are rejected."""
    path = tmp_path / "headers.json"
    path.write_text(json.dumps({
        "posts": [{"filename": "x.md", "header": {}}, {"filename": "x.md", "header": {}}],
        "pages": [],
    }))
    with pytest.raises(IndexFormatError, match="duplicate posts filename"):
        load_index(path)


def test_same_name_in_posts_and_pages_allowed():
    index = MetadataIndex(
        posts=[ContentRecord(file_name="about", metadata={})],
        pages=[ContentRecord(file_name="about", metadata={})],
    )
    assert len(index.posts) == len(index.pages) == 1
