from __future__ import annotations

from enum import Enum

from gocyclo.parsing.treesitter import iter_nodes


class NodeKind(Enum):
    DECLARATION = "declaration"
    CONDITIONAL = "conditional"
    LOOP = "loop"
    CASE_ARM = "case_arm"
    COMM_ARM = "comm_arm"
    LOGICAL_OP = "logical_op"
    IGNORE = "ignore"


NODE_KINDS = {
    "function_declaration": NodeKind.DECLARATION,
    "method_declaration": NodeKind.DECLARATION,
    "if_statement": NodeKind.CONDITIONAL,
    # Covers three-clause, condition-only, range and bare loops.
    "for_statement": NodeKind.LOOP,
    "expression_case": NodeKind.CASE_ARM,
    "type_case": NodeKind.CASE_ARM,
    "default_case": NodeKind.CASE_ARM,
    "communication_case": NodeKind.COMM_ARM,
}

LOGICAL_OPERATORS = {"&&", "||"}


def classify(node) -> NodeKind:
    if node.type == "binary_expression":
        operator = node.child_by_field_name("operator")
        if operator is not None and operator.type in LOGICAL_OPERATORS:
            return NodeKind.LOGICAL_OP
        return NodeKind.IGNORE
    return NODE_KINDS.get(node.type, NodeKind.IGNORE)


def cyclomatic(declaration) -> int:
    """Cyclomatic complexity of a function or method declaration.

    Every node of the subtree is visited once, the declaration itself
    included, so a body without decision points scores 1. Function
    literals are not a boundary: their branches count towards the
    enclosing declaration.
    """
    return sum(1 for node in iter_nodes(declaration) if classify(node) is not NodeKind.IGNORE)
