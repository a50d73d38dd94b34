from __future__ import annotations

from pathlib import Path

import pytest

from colorreport.source import Source, load_source


def test_line_handles_mixed_terminators():
    s = Source(None, "ab\nc\r\nd\n")
    assert s.line_count == 3
    assert s.line(1) == "ab"
    assert s.line(2) == "c"
    assert s.line(3) == "d"
    with pytest.raises(ValueError):
        s.line(4)


def test_window_is_clamped_to_the_file():
    s = Source(None, "one\ntwo\nthree\nfour\n")
    assert s.window(1, 2) == [(1, "one"), (2, "two"), (3, "three")]
    assert s.window(4, 2) == [(2, "two"), (3, "three"), (4, "four")]
    assert s.window(9, 2) == []
    assert s.window(0, 2) == []


def test_from_file_missing_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        Source.from_file(tmp_path / "nope.py")


def test_load_source_degrades_to_none(tmp_path: Path):
    assert load_source(None) is None
    assert load_source("<stdin>") is None
    assert load_source("<frozen importlib._bootstrap>") is None
    assert load_source(tmp_path / "nope.py") is None
    assert load_source(tmp_path) is None  # a directory


def test_load_source_uses_cache(tmp_path: Path):
    p = tmp_path / "mod.py"
    p.write_text("x = 1\n")
    cache: dict[str, Source | None] = {}
    first = load_source(p, cache)
    assert first is not None and first.line(1) == "x = 1"
    p.unlink()
    # a second lookup never touches the disk again
    assert load_source(p, cache) is first
    missing = tmp_path / "gone.py"
    assert load_source(missing, cache) is None
    assert cache[str(missing)] is None
