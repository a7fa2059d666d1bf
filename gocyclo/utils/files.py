from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Iterable, Sequence

from gocyclo.core.errors import UsageError
from gocyclo.parsing.treesitter import is_go_file


def iter_source_files(paths: Sequence[str], exclude: Sequence[str] = ()) -> Iterable[str]:
    """Expand command-line paths into the Go files to analyze.

    Files are yielded as given; directories are walked in sorted order
    and contribute every ``.go`` file below them.
    """
    for path in paths:
        target = Path(path)
        if target.is_dir():
            yield from _walk(path, exclude)
        elif target.exists():
            yield path
        else:
            raise UsageError(f"no such file or directory: {path}")


def _walk(root: str, exclude: Sequence[str], current: str | None = None) -> Iterable[str]:
    # Entries are visited in lexical order, files and subdirectories
    # interleaved, so "a/x.go" comes before "b.go".
    current = root if current is None else current
    with os.scandir(current) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    for entry in entries:
        if is_excluded(entry.path, root, exclude):
            continue
        if entry.is_dir(follow_symlinks=False):
            yield from _walk(root, exclude, entry.path)
        elif entry.is_file() and is_go_file(entry.path):
            yield entry.path


def is_excluded(path: str, root: str, patterns: Sequence[str]) -> bool:
    if not patterns:
        return False
    rel_path = Path(os.path.relpath(path, root)).as_posix()
    base = os.path.basename(path)
    for pattern in patterns:
        if fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(base, pattern):
            return True
        # "vendor/**" also matches the directory itself.
        if pattern.endswith("/**") and fnmatch.fnmatch(rel_path, pattern[:-3]):
            return True
    return False
