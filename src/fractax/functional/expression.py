from __future__ import annotations

import ast
import logging
import operator
from typing import Any, Callable, Mapping

from fractax.core.constants import EXPRESSION_DIVIDE_NAME
from fractax.core.fraction import Fraction
from fractax.functional.arithmetic import divide

logger = logging.getLogger(__name__)


class DivisionRewriter(ast.NodeTransformer):
    """Replaces every true division ``a / b`` by ``divide(a, b)``, innermost divisions first."""

    def visit_BinOp(self, node: ast.BinOp) -> ast.AST:
        self.generic_visit(node)
        if not isinstance(node.op, ast.Div):
            return node
        call = ast.Call(
            func=ast.Name(id=EXPRESSION_DIVIDE_NAME, ctx=ast.Load()),
            args=[node.left, node.right],
            keywords=[],
        )
        return ast.copy_location(call, node)


def rewrite_divisions(source: str) -> ast.Expression:
    """Parses a python expression and turns all of its divisions into fraction divisions

    Args:
        source (str): Expression, e.g. ``"(1 + 5/2) / 3"``

    Returns:
        ast.Expression: Rewritten expression tree, ready for evaluation
    """
    tree = ast.parse(source, mode="eval")
    tree = ast.fix_missing_locations(DivisionRewriter().visit(tree))
    logger.debug("Rewrote %r to %r", source, ast.unparse(tree))
    return tree


_BINARY_OPERATORS: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPERATORS: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


class FractionEvaluator(ast.NodeVisitor):
    """
    Evaluates a rewritten expression tree. Only numbers, names from the scope, arithmetic operators and calls of
    callables from the scope are allowed, any other syntax raises a ``ValueError``.
    """

    def __init__(self, scope: Mapping[str, Any]):
        self.scope = scope

    def generic_visit(self, node: ast.AST) -> Any:
        raise ValueError(f"Unsupported syntax in fraction expression: {type(node).__name__}")

    def visit_Expression(self, node: ast.Expression) -> Any:
        return self.visit(node.body)

    def visit_Constant(self, node: ast.Constant) -> Any:
        if isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
            return node.value
        raise ValueError(f"Unsupported constant in fraction expression: {node.value!r}")

    def visit_Name(self, node: ast.Name) -> Any:
        if node.id not in self.scope:
            raise NameError(f"name {node.id!r} is not defined")
        return self.scope[node.id]

    def visit_BinOp(self, node: ast.BinOp) -> Any:
        op = _BINARY_OPERATORS.get(type(node.op))
        if op is None:
            raise ValueError(f"Unsupported operator in fraction expression: {type(node.op).__name__}")
        return op(self.visit(node.left), self.visit(node.right))

    def visit_UnaryOp(self, node: ast.UnaryOp) -> Any:
        op = _UNARY_OPERATORS.get(type(node.op))
        if op is None:
            raise ValueError(f"Unsupported operator in fraction expression: {type(node.op).__name__}")
        return op(self.visit(node.operand))

    def visit_Call(self, node: ast.Call) -> Any:
        if not isinstance(node.func, ast.Name) or node.keywords:
            raise ValueError("Only positional calls of names are supported in fraction expressions")
        func = self.visit(node.func)
        if not callable(func):
            raise TypeError(f"{node.func.id!r} is not callable")
        return func(*[self.visit(arg) for arg in node.args])


def fraction_expr(source: str, namespace: Mapping[str, Any] | None = None) -> Any:
    """
    Evaluates a python expression where every division creates a fraction, e.g.
    ``fraction_expr("(3 + 4/3) / 5**2") == Fraction(13, 75)``. Names used in the expression are looked up
    in ``namespace``, builtins are not available.
    """
    tree = rewrite_divisions(source)
    scope: dict[str, Any] = {"Fraction": Fraction, EXPRESSION_DIVIDE_NAME: divide}
    if namespace is not None:
        scope.update(namespace)
    return FractionEvaluator(scope).visit(tree)
