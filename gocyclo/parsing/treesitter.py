from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

import tree_sitter_go
from tree_sitter import Language, Parser

from gocyclo.core.errors import ParseError


GO_LANGUAGE = Language(tree_sitter_go.language())

GO_EXTENSIONS = {".go"}

FUNCTION_NODE_TYPES = {"function_declaration", "method_declaration"}


@dataclass(frozen=True)
class ParsedFile:
    path: str
    source: bytes
    tree: object
    package_name: str

    @property
    def root(self):
        return self.tree.root_node


def is_go_file(path: str) -> bool:
    return Path(path).suffix in GO_EXTENSIONS


def parse_source(source: bytes, path: str = "<input>") -> ParsedFile:
    """Parse Go source into a syntax tree, raising ParseError on invalid input."""
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as exc:
        line_start = source.rfind(b"\n", 0, exc.start) + 1
        raise ParseError(
            path,
            source.count(b"\n", 0, exc.start) + 1,
            exc.start - line_start + 1,
            "illegal UTF-8 encoding",
        ) from exc
    # Parser instances are not shared between threads.
    parser = Parser(GO_LANGUAGE)
    tree = parser.parse(source)
    root = tree.root_node
    if root.has_error:
        bad = first_error_node(root)
        node = bad if bad is not None else root
        raise ParseError(
            path,
            node.start_point[0] + 1,
            node.start_point[1] + 1,
            _error_message(source, node),
        )
    package_name = _package_name(source, root)
    if package_name is None:
        raise ParseError(path, 1, 1, "expected 'package' clause")
    return ParsedFile(path=path, source=source, tree=tree, package_name=package_name)


def parse_file(path: str) -> ParsedFile:
    try:
        source = Path(path).read_bytes()
    except OSError as exc:
        raise ParseError(path, 0, 0, exc.strerror or str(exc)) from exc
    return parse_source(source, path)


def iter_nodes(node) -> Iterable[object]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(source: bytes, node) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def first_error_node(root) -> Optional[object]:
    for node in iter_nodes(root):
        if node.is_error or node.is_missing:
            return node
    return None


def _error_message(source: bytes, node) -> str:
    if node.is_missing:
        return f"syntax error: missing {node.type!r}"
    snippet = node_text(source, node).strip().splitlines()
    if snippet:
        return f"syntax error near {snippet[0][:40]!r}"
    return "syntax error"


def _package_name(source: bytes, root) -> Optional[str]:
    for child in root.named_children:
        if child.type != "package_clause":
            continue
        for part in child.named_children:
            if part.type == "package_identifier":
                return node_text(source, part)
    return None
