from __future__ import annotations

from gocyclo.parsing.treesitter import node_text


BAD_RECEIVER = "BADRECV"

# Go allows a single level of indirection on a method receiver.
MAX_POINTER_DEPTH = 1


def function_name(source: bytes, declaration) -> str:
    """Return "Name" for functions and "(Type).Name" for methods."""
    name_node = declaration.child_by_field_name("name")
    name = node_text(source, name_node) if name_node is not None else ""
    receiver = declaration.child_by_field_name("receiver")
    if receiver is None:
        return name
    params = [child for child in receiver.named_children if child.type != "comment"]
    if not params:
        return name
    return f"({receiver_type(source, params[0])}).{name}"


def receiver_type(source: bytes, param) -> str:
    """Render a receiver parameter's type as "T", "*T" or BAD_RECEIVER."""
    if param.type != "parameter_declaration":
        return BAD_RECEIVER
    typ = param.child_by_field_name("type")
    if typ is None:
        return BAD_RECEIVER
    return _render_type(source, typ, 0)


def _render_type(source: bytes, node, depth: int) -> str:
    if node.type == "type_identifier":
        return node_text(source, node)
    if node.type == "pointer_type" and depth < MAX_POINTER_DEPTH:
        pointee = node.named_children[0] if node.named_children else None
        if pointee is None:
            return BAD_RECEIVER
        inner = _render_type(source, pointee, depth + 1)
        if inner == BAD_RECEIVER:
            return BAD_RECEIVER
        return "*" + inner
    return BAD_RECEIVER
