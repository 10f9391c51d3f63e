"""Tool evaluating arithmetic expressions.

Expressions are parsed with ``ast`` and evaluated by walking a whitelist of
node types; names resolve only to the math functions and constants below.
"""

import ast
import math
import operator
from typing import Any, Callable

from pydantic import BaseModel, Field

from clippy_server.tools.base import ToolDeclaration, ToolExecutionError, parse_arguments

MAX_EXPONENT = 1000
MAX_EXPRESSION_LENGTH = 500
MAX_RESULT_BITS = 4096

SAFE_BIN_OPS: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

SAFE_UNARY_OPS: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

SAFE_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "sqrt": math.sqrt,
    "abs": abs,
    "round": round,
    "min": min,
    "max": max,
    "floor": math.floor,
    "ceil": math.ceil,
    "log": math.log,
    "log10": math.log10,
    "exp": math.exp,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
}

SAFE_CONSTANTS: dict[str, float] = {"pi": math.pi, "e": math.e}


def _check_power(base: Any, exponent: Any) -> None:
    # Bound the result size before computing it
    if abs(exponent) > MAX_EXPONENT:
        raise ValueError("exponent too large")
    if abs(base) > 1 and exponent > 0:
        if exponent * math.log2(abs(base)) > MAX_RESULT_BITS:
            raise ValueError("result too large")


def _check_size(value: Any) -> Any:
    if isinstance(value, int) and value.bit_length() > MAX_RESULT_BITS:
        raise ValueError("result too large")
    return value


def _eval_node(node: ast.AST) -> Any:
    if isinstance(node, ast.Expression):
        return _eval_node(node.body)
    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ValueError(f"unsupported literal: {node.value!r}")
        return node.value
    if isinstance(node, ast.UnaryOp) and type(node.op) in SAFE_UNARY_OPS:
        return SAFE_UNARY_OPS[type(node.op)](_eval_node(node.operand))
    if isinstance(node, ast.BinOp) and type(node.op) in SAFE_BIN_OPS:
        left = _eval_node(node.left)
        right = _eval_node(node.right)
        if isinstance(node.op, ast.Pow):
            _check_power(left, right)
        return _check_size(SAFE_BIN_OPS[type(node.op)](left, right))
    if isinstance(node, ast.Name):
        if node.id in SAFE_CONSTANTS:
            return SAFE_CONSTANTS[node.id]
        raise ValueError(f"unknown name: {node.id}")
    if isinstance(node, ast.Call) and isinstance(node.func, ast.Name):
        func = SAFE_FUNCTIONS.get(node.func.id)
        if func is None or node.keywords:
            raise ValueError(f"unsupported function: {node.func.id}")
        return _check_size(func(*[_eval_node(arg) for arg in node.args]))
    raise ValueError(f"unsupported syntax: {type(node).__name__}")


def evaluate(expression: str) -> int | float:
    """Evaluate an arithmetic expression.

    Raises:
        ValueError: If the expression is invalid or can't be evaluated
    """
    if len(expression) > MAX_EXPRESSION_LENGTH:
        raise ValueError("expression too long")
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as e:
        raise ValueError(f"invalid expression: {e.msg}") from e
    try:
        return _eval_node(tree)
    except (ArithmeticError, TypeError) as e:
        raise ValueError(str(e)) from e


def format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class CalculateArguments(BaseModel):
    expression: str = Field(min_length=1)


class CalculatorTool:
    """Evaluates mathematical expressions without executing code."""

    name = "calculate"

    def declaration(self) -> ToolDeclaration:
        return ToolDeclaration(
            name=self.name,
            description=(
                "Evaluate mathematical expressions safely. Supports basic arithmetic, "
                "parentheses, and common math operations."
            ),
            parameters={
                "type": "object",
                "properties": {
                    "expression": {
                        "type": "string",
                        "description": (
                            "Mathematical expression to evaluate "
                            "(e.g., '2 + 2', '(10 * 5) / 2', 'sqrt(16)')"
                        ),
                    },
                },
                "required": ["expression"],
            },
        )

    async def execute(self, arguments: str) -> str:
        args = parse_arguments(arguments, CalculateArguments)
        try:
            return format_number(evaluate(args.expression))
        except ValueError as e:
            raise ToolExecutionError(f"failed to evaluate: {e}") from e
