"""
Complexity Calculator
Cyclomatic complexity over tree-sitter nodes, plus the maintainability and
technical-debt formulas shared by file and repository scopes.
"""
import math
from typing import Iterable, List

from tree_sitter import Node

from .models import ClassInfo, ComplexityMetrics, FileAnalysis, FunctionInfo

DECISION_NODES = frozenset({
    "if_statement",
    "for_statement",
    "for_in_statement",  # also covers for...of
    "while_statement",
    "do_statement",
    "switch_case",
    "switch_default",
    "catch_clause",
    "ternary_expression",
})

LOGICAL_OPERATORS = frozenset({"&&", "||"})

# Nested callables and classes get their own score and are never walked
# as part of the enclosing function.
NESTED_SCOPE_NODES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
    "class_declaration",
    "abstract_class_declaration",
    "class",
})

DEBT_PER_POINT = 0.5


def _is_logical(node: Node) -> bool:
    if node.type != "binary_expression":
        return False
    operator = node.child_by_field_name("operator")
    return operator is not None and operator.type in LOGICAL_OPERATORS


def count_decision_points(root: Node) -> int:
    """Count decision points below ``root`` without entering nested scopes."""
    count = 0
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        if node.type in DECISION_NODES or _is_logical(node):
            count += 1
        for child in node.children:
            if child.type in NESTED_SCOPE_NODES:
                continue
            stack.append(child)
    return count


def function_complexity(node: Node) -> int:
    """
    Cyclomatic complexity of a function, arrow function or method node.

    Returns 1 plus one per decision point in the body.
    """
    body = node.child_by_field_name("body")
    if body is None:
        return 1
    if body.type in NESTED_SCOPE_NODES:
        # e.g. `() => () => x`: the body is itself a separate callable
        return 1
    return 1 + count_decision_points(body)


def maintainability_index(cyclomatic: float, lines: int) -> float:
    """
    Maintainability index clamped to [0, 100].

    volume = L * log2(max(C, 1));
    MI = 171 - 5.2 ln(volume) - 0.23 C - 16.2 ln(L)
    """
    if lines <= 0:
        return 100.0
    volume = lines * math.log2(max(cyclomatic, 1))
    if volume <= 0:
        # -5.2 * ln(0) diverges to +inf, which clamps to the upper bound
        return 100.0
    value = 171 - 5.2 * math.log(volume) - 0.23 * cyclomatic - 16.2 * math.log(lines)
    return max(0.0, min(100.0, value))


def file_complexity(functions: Iterable[FunctionInfo], classes: Iterable[ClassInfo], lines: int) -> ComplexityMetrics:
    total = sum(f.complexity for f in functions) + sum(c.complexity for c in classes)
    cyclomatic = max(1, total)
    return ComplexityMetrics(
        cyclomatic=cyclomatic,
        cognitive=cyclomatic,
        maintainability=maintainability_index(cyclomatic, lines),
    )


def technical_debt(files: Iterable[FileAnalysis], threshold: int = 10) -> float:
    """Half a point of debt for every complexity point above ``threshold``."""
    debt = 0.0
    for file in files:
        excess = file.complexity.cyclomatic - threshold
        if excess > 0:
            debt += excess * DEBT_PER_POINT
    return debt
