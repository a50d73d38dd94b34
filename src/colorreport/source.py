from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

logger = logging.getLogger(__name__)


def _compute_line_starts(s: str) -> tuple[int, ...]:
    # Start of each line (1st line starts at 0). Handles \n, \r\n, \r via splitlines.
    starts = [0]
    pos = 0
    for part in s.splitlines(keepends=True):
        pos += len(part)
        starts.append(pos)
    return tuple(starts)


@dataclass(frozen=True, slots=True)
class Source:
    file: Path | None
    contents: str

    _line_starts: tuple[int, ...] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def from_file(cls, path_rep: str | Path | PathLike[str], encoding: str = "utf-8") -> Source:
        path = Path(path_rep)

        if not path.exists():
            raise FileNotFoundError(f"No such file: {path}")
        elif path.is_dir():
            raise IsADirectoryError(f"Expected a file but found a directory: {path}")

        try:
            return cls(path, path.read_text(encoding=encoding))
        except UnicodeDecodeError:
            raise
        except OSError as e:
            raise OSError(f"Failed to read file {path}: {e}") from e

    @property
    def line_starts(self) -> tuple[int, ...]:
        ls = self._line_starts
        if ls is None:
            ls = _compute_line_starts(self.contents)
            # works for both frozen and non-frozen dataclasses
            object.__setattr__(self, "_line_starts", ls)
        return ls

    @property
    def line_count(self) -> int:
        # `line_starts` includes a sentinel at len(contents)
        return len(self.line_starts) - 1

    def line(self, lineno: int) -> str:
        '''1-indexed line text without its line terminator.'''
        if not (1 <= lineno <= self.line_count):
            raise ValueError(f"line {lineno} out of range [1, {self.line_count}]")
        start = self.line_starts[lineno - 1]
        end = self.line_starts[lineno]
        return self.contents[start:end].rstrip("\n\r")

    def window(self, lineno: int, context: int) -> list[tuple[int, str]]:
        '''
        Lines `lineno - context` .. `lineno + context`, clamped to the file.
        Empty when `lineno` is not a line of this source.
        '''
        if not (1 <= lineno <= self.line_count):
            return []
        lo = max(1, lineno - context)
        hi = min(self.line_count, lineno + context)
        return [(n, self.line(n)) for n in range(lo, hi + 1)]


def load_source(
    path: str | Path | None,
    cache: MutableMapping[str, Source | None] | None = None,
) -> Source | None:
    """
    Best-effort Source lookup used for source windows. Unreadable, missing and
    pseudo files ("<stdin>", "<frozen ...>") give None.
    """
    if path is None:
        return None
    key = str(path)
    if cache is not None and key in cache:
        return cache[key]

    src: Source | None = None
    if not (key.startswith("<") and key.endswith(">")):
        try:
            src = Source.from_file(key)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("no source window for %s: %s", key, e)

    if cache is not None:
        cache[key] = src
    return src
