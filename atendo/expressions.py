"""
The closed expression language used by request tests and assignments.

Lexicon entries carry expressions as data. They are compiled once into three
node kinds and interpreted against an Environment; nothing is ever handed to
the host interpreter.

- ``Literal``: quoted data, numbers, ``nil``, ``t``
- ``SlotRef``: a bare symbol, read from the environment
- ``Call``: one of the operators in ``OPERATORS``
"""
from dataclasses import dataclass
from numbers import Number
from typing import Any, Callable, Dict, Tuple

from atendo.cd_form import Compound, Frame, Var, build_template, is_empty, is_symbol
from atendo.errors import MalformedRequest


def is_true(value: Any) -> bool:
    """Lisp truth: absent, false and the empty sequence are false."""
    return not is_empty(value)


@dataclass(frozen=True)
class Literal:
    value: Any

    def evaluate(self, env) -> Any:
        return self.value


@dataclass(frozen=True)
class SlotRef:
    slot: str

    def evaluate(self, env) -> Any:
        return env.get(self.slot)


@dataclass(frozen=True)
class Call:
    op: str
    args: Tuple[Any, ...]

    def evaluate(self, env) -> Any:
        if self.op == "and":
            result = True
            for arg in self.args:
                result = arg.evaluate(env)
                if not is_true(result):
                    return False
            return result
        if self.op == "or":
            for arg in self.args:
                result = arg.evaluate(env)
                if is_true(result):
                    return result
            return False
        _, function = OPERATORS[self.op]
        values = [arg.evaluate(env) for arg in self.args]
        return function(self.op, *values)


# -----------------------------------------------------------------------------
# --- Operators
# -----------------------------------------------------------------------------

def _numbers(op: str, *values: Any):
    for value in values:
        if not isinstance(value, Number) or isinstance(value, bool):
            raise MalformedRequest(f"Operator '{op}' expects numbers, got {value!r}")
    return values


def _compare(op: str, left: Any, right: Any) -> bool:
    left, right = _numbers(op, left, right)
    if op == "<":
        return left < right
    if op == ">":
        return left > right
    if op == "<=":
        return left <= right
    return left >= right


def _add(op: str, *values: Any):
    return sum(_numbers(op, *values))


def _subtract(op: str, left: Any, right: Any):
    left, right = _numbers(op, left, right)
    return left - right


def _first(op: str, value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, Compound):
        value = value.frames
    if not isinstance(value, tuple):
        raise MalformedRequest(f"Operator '{op}' expects a sequence, got {value!r}")
    return value[0] if value else None


def _add_role(op: str, target: Any, role: Any, filler: Any) -> Any:
    """Append a (role filler) pair to a frame, or to a pair list."""
    if not is_symbol(role):
        raise MalformedRequest(f"Operator '{op}' expects a role symbol, got {role!r}")
    if isinstance(target, Frame):
        return target.with_role(role, filler)
    if target is None:
        return ((role, filler),)
    if isinstance(target, tuple):
        return target + ((role, filler),)
    raise MalformedRequest(f"Operator '{op}' cannot add a role to {target!r}")


def _append(op: str, frame: Any, extra: Any) -> Any:
    """Extend a frame with a pair list or with another frame's roles."""
    if frame is None:
        return None
    if not isinstance(frame, Frame):
        raise MalformedRequest(f"Operator '{op}' expects a frame, got {frame!r}")
    if extra is None:
        return frame
    if isinstance(extra, Frame):
        return frame.extend(extra.roles)
    if isinstance(extra, tuple):
        return frame.extend(extra)
    raise MalformedRequest(f"Operator '{op}' cannot append {extra!r}")


# name -> (arity or None for variadic, implementation)
OPERATORS: Dict[str, Tuple[Any, Callable]] = {
    "equal": (2, lambda op, a, b: a == b),
    "not": (1, lambda op, a: not is_true(a)),
    "null": (1, lambda op, a: is_empty(a)),
    "and": (None, None),
    "or": (None, None),
    "<": (2, _compare),
    ">": (2, _compare),
    "<=": (2, _compare),
    ">=": (2, _compare),
    "+": (None, _add),
    "-": (2, _subtract),
    "first": (1, _first),
    "add-role": (3, _add_role),
    "append": (2, _append),
}


def compile_expression(raw: Any) -> Any:
    """
    Compile normalised S-expression data into an expression node.

    Raises:
        MalformedRequest: for unknown operators, wrong arity, or a quoted
            variable reference standing alone.
    """
    if isinstance(raw, list):
        if not raw:
            return Literal(None)
        head = raw[0]
        if head == "quote":
            if len(raw) != 2:
                raise MalformedRequest(f"quote takes exactly one argument: {raw!r}")
            value = build_template(raw[1])
            if isinstance(value, Var):
                raise MalformedRequest(
                    f"Variable reference ?{value.name} cannot be a value on its own"
                )
            return Literal(value)
        if not is_symbol(head) or head not in OPERATORS:
            raise MalformedRequest(f"Unknown operator {head!r}")
        arity, _ = OPERATORS[head]
        args = tuple(compile_expression(arg) for arg in raw[1:])
        if arity is not None and len(args) != arity:
            raise MalformedRequest(
                f"Operator '{head}' takes {arity} argument(s), got {len(args)}"
            )
        return Call(head, args)

    if is_symbol(raw):
        if raw == "nil":
            return Literal(None)
        if raw == "t":
            return Literal(True)
        return SlotRef(raw)

    # numbers, True
    return Literal(raw)
