import ast
import logging
import math
import operator
import re
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

ERROR_TOKEN = "Error"
BACKSPACE = "⌫"
DIGITS = frozenset("0123456789")

# Binary operators the keypad can leave pending
OPERATIONS: Dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}

_NUMBER_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)\Z",
    re.IGNORECASE | re.ASCII,
)


class EvalError(Exception):
    pass


class DivisionByZero(EvalError):
    pass


def parse_number(text: str) -> Optional[float]:
    """Parse a display buffer as a float, or return None when it isn't a number."""
    if not _NUMBER_RE.match(text):
        return None
    return float(text)


def format_number(value: float) -> str:
    """
    Render a result the way the display shows it: shortest round-trip digits,
    never exponent notation, and no trailing ".0" on integral values.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")


# -------------------------
# Keypad state machine
# -------------------------
@dataclass(frozen=True)
class CalculatorState:
    display: str = ""
    operation: Optional[str] = None
    operand: Optional[float] = None


def apply_input(state: CalculatorState, symbol: str) -> CalculatorState:
    """Return the state that follows from pressing one keypad symbol."""
    if symbol in DIGITS:
        return replace(state, display=state.display + symbol)
    if symbol == ".":
        if "." in state.display:
            return state
        return replace(state, display=state.display + symbol)
    if symbol in OPERATIONS:
        return _apply_operator(state, symbol)
    if symbol == "=":
        return _apply_equals(state)
    if symbol == "C":
        return CalculatorState()
    if symbol == BACKSPACE:
        return replace(state, display=state.display[:-1])
    logger.debug("Ignoring unknown input symbol %r", symbol)
    return state


def _apply_operator(state: CalculatorState, symbol: str) -> CalculatorState:
    display = state.display
    # a trailing operator typed into the buffer is replaced by the new one
    if display and display[-1] in OPERATIONS:
        display = display[:-1]

    value = parse_number(display)
    if value is None:
        if not display and state.operation is not None:
            return replace(state, display=display, operation=symbol)
        logger.debug("Operator %s ignored, buffer %r is not a number", symbol, display)
        return replace(state, display=display)

    return CalculatorState(display="", operation=symbol, operand=value)


def _apply_equals(state: CalculatorState) -> CalculatorState:
    if state.operation is None or state.operand is None:
        return state
    right = parse_number(state.display)
    if right is None:
        logger.debug("Equals ignored, buffer %r is not a number", state.display)
        return state

    if state.operation == "/" and right == 0.0:
        logger.debug("Division by zero: %s / %s", state.operand, right)
        return CalculatorState(display=ERROR_TOKEN)

    result = OPERATIONS[state.operation](state.operand, right)
    return CalculatorState(display=format_number(result))


# -------------------------
# Free-text expressions
# -------------------------
class SafeEvaluator(ast.NodeVisitor):
    """
    Evaluates a parsed AST expression safely, allowing only numbers, a few
    named constants, the arithmetic operators and a small set of functions.
    """

    def __init__(self, funcs: Dict[str, Any], names: Dict[str, float]):
        self.funcs = funcs
        self.names = names

    def visit(self, node):
        method = "visit_" + node.__class__.__name__
        visitor = getattr(self, method, self.generic_visit)
        return visitor(node)

    def visit_Expression(self, node: ast.Expression):
        return self.visit(node.body)

    def visit_Constant(self, node: ast.Constant):
        # bool is an int subclass; True + 1 is not arithmetic we accept
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise EvalError(f"Unsupported literal: {node.value!r}")
        try:
            return float(node.value)
        except OverflowError as e:
            raise EvalError(str(e))

    def visit_UnaryOp(self, node: ast.UnaryOp):
        operand = self.visit(node.operand)
        if isinstance(node.op, ast.UAdd):
            return +operand
        if isinstance(node.op, ast.USub):
            return -operand
        raise EvalError(f"Unsupported unary operator: {node.op.__class__.__name__}")

    def visit_BinOp(self, node: ast.BinOp):
        left = self.visit(node.left)
        right = self.visit(node.right)
        ops = {
            ast.Add: operator.add,
            ast.Sub: operator.sub,
            ast.Mult: operator.mul,
            ast.Div: operator.truediv,
            ast.Mod: operator.mod,
            ast.Pow: operator.pow,
        }
        for t, fn in ops.items():
            if isinstance(node.op, t):
                try:
                    result = fn(left, right)
                except ZeroDivisionError:
                    raise DivisionByZero("Division by zero")
                except (ArithmeticError, ValueError) as e:
                    raise EvalError(str(e))
                if isinstance(result, complex):
                    raise EvalError("Result is not a real number")
                return result
        raise EvalError(f"Unsupported binary operator: {node.op.__class__.__name__}")

    def visit_Call(self, node: ast.Call):
        if not isinstance(node.func, ast.Name):
            raise EvalError("Only direct function calls allowed")
        if node.keywords:
            raise EvalError("Keyword arguments are not supported")
        fname = node.func.id.lower()
        if fname not in self.funcs:
            raise EvalError(f"Unknown function: {fname}")
        args = [self.visit(a) for a in node.args]
        try:
            return float(self.funcs[fname](*args))
        except ZeroDivisionError:
            raise DivisionByZero(f"Division by zero in {fname}()")
        except TypeError as e:
            raise EvalError(f"Function call error: {e}")
        except (ArithmeticError, ValueError) as e:
            raise EvalError(str(e))

    def visit_Name(self, node: ast.Name):
        nid = node.id.lower()
        if nid in self.names:
            return self.names[nid]
        raise EvalError(f"Unknown name: {node.id}")

    def generic_visit(self, node):
        raise EvalError(f"Unsupported expression: {node.__class__.__name__}")


FUNCTIONS: Dict[str, Any] = {
    "sqrt": math.sqrt,
    "abs": abs,
    "ln": math.log,
    "log": lambda x, base=None: math.log10(x) if base is None else math.log(x, base),
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "round": round,
}

NAMES: Dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}


def evaluate(expression: str) -> float:
    """
    Evaluate a free-text arithmetic expression such as "2+3*(4-1)".
    "^" is accepted as power. Raises EvalError (or DivisionByZero) on failure.
    """
    if not isinstance(expression, str):
        raise EvalError("Expression must be a string")

    expr = expression.strip().replace("^", "**")
    if not expr:
        raise EvalError("Empty expression")
    try:
        node = ast.parse(expr, mode="eval")
    except (SyntaxError, ValueError) as e:
        raise EvalError(f"Invalid syntax: {e}")
    except (RecursionError, MemoryError):
        raise EvalError("Expression is too deeply nested")
    # the evaluator recurses once per node
    try:
        return SafeEvaluator(FUNCTIONS, NAMES).visit(node)
    except RecursionError:
        raise EvalError("Expression is too long")


# -------------------------
# Stateful wrapper used by the GUI
# -------------------------
class CalculatorEngine:
    def __init__(self, state: Optional[CalculatorState] = None):
        self._state = state or CalculatorState()

    @property
    def state(self) -> CalculatorState:
        return self._state

    @property
    def display(self) -> str:
        return self._state.display

    @property
    def pending_operator(self) -> Optional[str]:
        return self._state.operation

    @property
    def stored_operand(self) -> Optional[float]:
        return self._state.operand

    def press(self, symbol: str) -> str:
        """Feed one input symbol and return the new display text."""
        self._state = apply_input(self._state, symbol)
        return self._state.display

    def press_many(self, symbols: Iterable[str]) -> str:
        for symbol in symbols:
            self.press(symbol)
        return self._state.display

    def clear(self):
        self._state = CalculatorState()

    def set_display(self, text: str):
        """Replace the buffer with text edited directly in the display field."""
        self._state = replace(self._state, display=text)

    def pending_text(self) -> str:
        """Status line text such as "12 +", empty when nothing is pending."""
        if self._state.operation is None or self._state.operand is None:
            return ""
        return f"{format_number(self._state.operand)} {self._state.operation}"

    def evaluate_expression(self, expression: str) -> bool:
        """
        Evaluate a free-text expression into the display. Returns True when the
        state changed; malformed expressions leave everything as it was.
        """
        try:
            result = evaluate(expression)
        except DivisionByZero:
            logger.debug("Division by zero in expression %r", expression)
            self._state = CalculatorState(display=ERROR_TOKEN)
            return True
        except EvalError as e:
            logger.debug("Ignoring expression %r: %s", expression, e)
            return False

        self._state = CalculatorState(display=format_number(result))
        return True
