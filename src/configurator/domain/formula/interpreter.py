"""Sandboxed formula interpreter.

Formulas are small arithmetic expressions over host functions, for example
``cab('A', 'width') + 50`` or ``max(viewGd('B', 'gd-h'), 720) / 2``. They are
parsed with :mod:`ast` and only a whitelisted set of nodes is evaluated;
attribute access, subscripts, comprehensions and calls to anything outside
the function table are rejected.

``^`` is exponentiation, as in the catalog's formula editor. Comparisons and
boolean operators evaluate to 1.0 or 0.0.
"""

from __future__ import annotations

import ast
import math
from typing import Any, Callable, Mapping

from ..errors import FormulaError

HostFunction = Callable[..., Any]

MATH_FUNCTIONS: dict[str, HostFunction] = {
    "min": min,
    "max": max,
    "abs": abs,
    "round": round,
    "floor": math.floor,
    "ceil": math.ceil,
    "sqrt": math.sqrt,
}

_ALLOWED = {
    ast.Expression,
    ast.BinOp,
    ast.UnaryOp,
    ast.Constant,
    ast.Name,
    ast.Load,
    ast.Call,
    ast.Add,
    ast.Sub,
    ast.Mult,
    ast.Div,
    ast.Pow,
    ast.Mod,
    ast.FloorDiv,
    ast.USub,
    ast.UAdd,
    ast.Not,
    ast.Compare,
    ast.Gt,
    ast.GtE,
    ast.Lt,
    ast.LtE,
    ast.Eq,
    ast.NotEq,
    ast.BoolOp,
    ast.And,
    ast.Or,
    ast.IfExp,
}

_FORBIDDEN_TOKENS = ("__", "import", "lambda", "exec", "eval", "globals", "locals")

_BINARY_OPS: dict[type, Callable[[float, float], float]] = {
    ast.Add: lambda a, b: a + b,
    ast.Sub: lambda a, b: a - b,
    ast.Mult: lambda a, b: a * b,
    ast.Div: lambda a, b: a / b,
    ast.Pow: lambda a, b: a**b,
    ast.Mod: lambda a, b: a % b,
    ast.FloorDiv: lambda a, b: a // b,
}

_COMPARE_OPS: dict[type, Callable[[Any, Any], bool]] = {
    ast.Gt: lambda a, b: a > b,
    ast.GtE: lambda a, b: a >= b,
    ast.Lt: lambda a, b: a < b,
    ast.LtE: lambda a, b: a <= b,
    ast.Eq: lambda a, b: a == b,
    ast.NotEq: lambda a, b: a != b,
}


def _caret_to_pow(text: str) -> str:
    """Rewrite ``^`` as ``**`` outside string literals."""
    out: list[str] = []
    quote: str | None = None
    for char in text:
        if quote is not None:
            if char == quote:
                quote = None
            out.append(char)
        elif char in ("'", '"'):
            quote = char
            out.append(char)
        elif char == "^":
            out.append("**")
        else:
            out.append(char)
    return "".join(out)


class FormulaInterpreter:
    """Parses and evaluates formulas against a host-function table.

    Parsed trees are cached by formula text, so re-evaluating the same
    formula on every pass does not re-parse it.

    Args:
        functions: Extra functions available to every formula, in addition
            to the math functions.
    """

    def __init__(self, functions: Mapping[str, HostFunction] | None = None) -> None:
        self.functions: dict[str, HostFunction] = dict(MATH_FUNCTIONS)
        if functions:
            self.functions.update(functions)
        self._cache: dict[str, ast.Expression] = {}

    def parse(self, formula: str, host_names: frozenset[str] = frozenset()) -> ast.Expression:
        """Parse and validate a formula.

        Args:
            formula: Formula text.
            host_names: Names of host functions that will be supplied at
                evaluation time.

        Raises:
            FormulaError: If the formula is empty, malformed, or uses
                anything outside the whitelist.
        """
        text = (formula or "").strip()
        if not text:
            raise FormulaError("Empty formula", formula)
        for token in _FORBIDDEN_TOKENS:
            if token in text:
                raise FormulaError(f"Forbidden token: {token}", formula)

        tree = self._cache.get(text)
        if tree is None:
            try:
                tree = ast.parse(_caret_to_pow(text), mode="eval")
            except SyntaxError as e:
                raise FormulaError(f"Invalid formula syntax: {e.msg}", formula) from e
            self._cache[text] = tree

        allowed_calls = set(self.functions) | set(host_names)
        for node in ast.walk(tree):
            if type(node) not in _ALLOWED:
                raise FormulaError(f"Unsupported token: {type(node).__name__}", formula)
            if isinstance(node, ast.Call):
                if not isinstance(node.func, ast.Name):
                    raise FormulaError("Only direct function calls are allowed", formula)
                if node.func.id not in allowed_calls:
                    raise FormulaError(f"Function not allowed: {node.func.id}", formula)
                if node.keywords:
                    raise FormulaError("Keyword arguments are not supported", formula)
        return tree

    def validate(self, formula: str, host_names: frozenset[str] = frozenset()) -> None:
        """Raise FormulaError if ``formula`` would not parse."""
        self.parse(formula, host_names)

    def evaluate(
        self,
        formula: str,
        host: Mapping[str, HostFunction] | None = None,
    ) -> float:
        """Evaluate a formula to a float.

        Args:
            formula: Formula text.
            host: Host functions for this evaluation, such as ``cab``,
                ``dim`` and ``viewGd``.

        Returns:
            The numeric result. It may be non-finite; callers decide what to
            do with infinities and NaN.

        Raises:
            FormulaError: On parse failures, unknown names, type errors or
                arithmetic errors such as division by zero.
        """
        host = dict(host or {})
        tree = self.parse(formula, frozenset(host))
        functions = {**self.functions, **host}

        def _eval(node: ast.AST) -> Any:
            if isinstance(node, ast.Expression):
                return _eval(node.body)
            if isinstance(node, ast.Constant):
                if isinstance(node.value, bool) or node.value is None:
                    raise FormulaError(f"Unsupported literal: {node.value!r}", formula)
                if isinstance(node.value, (int, float, str)):
                    return node.value
                raise FormulaError(f"Unsupported literal: {node.value!r}", formula)
            if isinstance(node, ast.Name):
                raise FormulaError(f"Unknown name: {node.id}", formula)
            if isinstance(node, ast.UnaryOp):
                if isinstance(node.op, ast.Not):
                    return 0.0 if _eval(node.operand) else 1.0
                value = _number(_eval(node.operand))
                return -value if isinstance(node.op, ast.USub) else +value
            if isinstance(node, ast.BinOp):
                left = _number(_eval(node.left))
                right = _number(_eval(node.right))
                return _BINARY_OPS[type(node.op)](left, right)
            if isinstance(node, ast.Call):
                fn = functions[node.func.id]
                return fn(*[_eval(arg) for arg in node.args])
            if isinstance(node, ast.Compare):
                left = _eval(node.left)
                for op, comparator in zip(node.ops, node.comparators):
                    right = _eval(comparator)
                    if not _COMPARE_OPS[type(op)](left, right):
                        return 0.0
                    left = right
                return 1.0
            if isinstance(node, ast.BoolOp):
                values = [_eval(v) for v in node.values]
                if isinstance(node.op, ast.And):
                    return 1.0 if all(values) else 0.0
                return 1.0 if any(values) else 0.0
            if isinstance(node, ast.IfExp):
                return _eval(node.body) if _eval(node.test) else _eval(node.orelse)
            raise FormulaError(f"Unsupported AST node: {type(node).__name__}", formula)

        def _number(value: Any) -> float:
            if isinstance(value, str):
                raise FormulaError(f"Expected a number, got {value!r}", formula)
            return float(value)

        try:
            result = _eval(tree)
            return _number(result)
        except FormulaError:
            raise
        except (ArithmeticError, TypeError, ValueError) as e:
            raise FormulaError(f"Formula evaluation failed: {e}", formula) from e
