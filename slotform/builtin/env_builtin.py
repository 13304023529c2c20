"""Built-in functions for the slotform runtime environment.

Arithmetic, comparison, list and container construction, and the object
protocol used with classes built by defclass.
"""
from __future__ import annotations

from slotform import LispValue
from slotform.evaluation.apply import apply as apply_engine
from slotform.evaluation.evaluator import evaluate
from slotform.evaluation.special_forms.defclass_form import keyword_args
from slotform.evaluation.special_forms.if_form import is_true
from slotform.printer import to_lisp
from slotform.types.class_def import ClassDef, Instance
from slotform.types.environment import Environment
from slotform.types.errors import LispError, SlotformArityError, SlotformTypeError
from slotform.types.macro_environment import MacroEnvironment
from slotform.types.nil import Nil
from slotform.types.symbol import Symbol, TRUE, FALSE
from slotform.types.vector import Vector
from slotform.inference.type_inference import type_of


def _bool(value: bool) -> Symbol:
    return TRUE if value else FALSE


def _arity(name: str, args: list[LispValue], n: int) -> None:
    if len(args) != n:
        raise SlotformArityError(f"{name} requires exactly {n} argument(s)")


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the numeric sum of all arguments; errors if any arg is non-numeric."""
    try:
        return sum(expr)
    except TypeError:
        raise SlotformTypeError("All arguments to + must be numbers")


def sub(env: Environment, expr: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    if not expr:
        raise SlotformArityError("- requires at least 1 argument")
    try:
        if len(expr) == 1:
            return -expr[0]
        result = expr[0]
        for x in expr[1:]:
            result -= x
        return result
    except TypeError:
        raise SlotformTypeError("All arguments to - must be numbers")


def mul(env: Environment, expr: list[LispValue]) -> LispValue:
    result = 1
    try:
        for x in expr:
            result *= x
        return result
    except TypeError:
        raise SlotformTypeError("All arguments to * must be numbers")


def div(env: Environment, expr: list[LispValue]) -> LispValue:
    """Divide left-to-right; with one arg returns the reciprocal."""
    if not expr:
        raise SlotformArityError("/ requires at least 1 argument")
    try:
        if len(expr) == 1:
            return 1 / expr[0]
        result = expr[0]
        for x in expr[1:]:
            result /= x
        return result
    except TypeError:
        raise SlotformTypeError("All arguments to / must be numbers")


def equals(env: Environment, expr: list[LispValue]) -> Symbol:
    """#t if all arguments are equal (or zero/one arg), else #f."""
    return _bool(all(a == b for a, b in zip(expr, expr[1:])))


def lt(env: Environment, expr: list[LispValue]) -> Symbol:
    return _bool(all(a < b for a, b in zip(expr, expr[1:])))


def gt(env: Environment, expr: list[LispValue]) -> Symbol:
    return _bool(all(a > b for a, b in zip(expr, expr[1:])))


def logical_not(env: Environment, expr: list[LispValue]) -> Symbol:
    _arity("not", expr, 1)
    return _bool(not is_true(expr[0]))


# -------------------------------
# Lists and containers
# -------------------------------
def cons(env: Environment, expr: list[LispValue]) -> LispValue:
    """Prepend head to a list; a non-list tail gives a dotted pair."""
    _arity("cons", expr, 2)
    head, tail = expr
    if tail is Nil:
        return [head]
    if isinstance(tail, list):
        return [head] + tail
    return [head], tail


def car(env: Environment, expr: list[LispValue]) -> LispValue:
    _arity("car", expr, 1)
    xs = expr[0]
    if isinstance(xs, tuple):
        return xs[0][0] if xs[0] else Nil
    return xs[0] if isinstance(xs, list) and xs else Nil


def cdr(env: Environment, expr: list[LispValue]) -> LispValue:
    _arity("cdr", expr, 1)
    xs = expr[0]
    if isinstance(xs, tuple):
        items, tail = xs
        return tail if len(items) <= 1 else (items[1:], tail)
    return xs[1:] if isinstance(xs, list) and len(xs) > 1 else Nil


def list_builtin(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    return list(expr)


def vector_builtin(env: Environment, expr: list[LispValue]) -> Vector:
    return Vector(expr)


def make_hash_table(env: Environment, expr: list[LispValue]) -> dict:
    """(make-hash-table [k v ...]) -> a new mapping."""
    if len(expr) % 2:
        raise SlotformArityError("make-hash-table expects key value pairs")
    return dict(zip(expr[::2], expr[1::2]))


def make_funcall(macros: MacroEnvironment):
    """Build (funcall f args...) for an interpreter whose macros are `macros`.

    Lambdas called through funcall expand their bodies with the same macro
    table as directly applied ones.
    """

    def funcall(env: Environment, expr: list[LispValue]) -> LispValue:
        if not expr:
            raise SlotformArityError("funcall requires a function")
        return apply_engine(expr[0], list(expr[1:]), env, macros, evaluate)

    return funcall


def error(env: Environment, expr: list[LispValue]) -> LispValue:
    """(error "message" args...) signals a LispError."""
    message = " ".join(a if isinstance(a, str) else to_lisp(a) for a in expr)
    raise LispError(message or "error")


def type_of_builtin(env: Environment, expr: list[LispValue]) -> Symbol:
    _arity("type-of", expr, 1)
    return type_of(expr[0])


# -------------------------------
# Objects
# -------------------------------
def _class_arg(env: Environment, value: LispValue) -> ClassDef:
    cls = env.lookup(value) if isinstance(value, Symbol) else value
    if not isinstance(cls, ClassDef):
        raise SlotformTypeError(f"{to_lisp(value)} does not name a class")
    return cls


def _instance_arg(name: str, value: LispValue) -> Instance:
    if not isinstance(value, Instance):
        raise SlotformTypeError(f"{name} expects an instance, got {to_lisp(value)}")
    return value


def make_instance(env: Environment, expr: list[LispValue]) -> Instance:
    """(make-instance 'class :initarg value ...)"""
    if not expr:
        raise SlotformArityError("make-instance requires a class")
    cls = _class_arg(env, expr[0])
    return cls.make_instance(keyword_args(cls, list(expr[1:])))


def slot_value(env: Environment, expr: list[LispValue]) -> LispValue:
    _arity("slot-value", expr, 2)
    return _instance_arg("slot-value", expr[0]).get(expr[1])


def set_slot_value(env: Environment, expr: list[LispValue]) -> LispValue:
    _arity("set-slot-value", expr, 3)
    return _instance_arg("set-slot-value", expr[0]).set(expr[1], expr[2])


def slot_boundp(env: Environment, expr: list[LispValue]) -> Symbol:
    _arity("slot-boundp", expr, 2)
    return _bool(_instance_arg("slot-boundp", expr[0]).is_bound(expr[1]))


def class_of(env: Environment, expr: list[LispValue]) -> LispValue:
    _arity("class-of", expr, 1)
    return _instance_arg("class-of", expr[0]).cls


def register(env: Environment, macros: MacroEnvironment | None = None) -> None:
    """Register all builtin functions into the given environment.

    `macros` is the macro table funcall expands lambda bodies with.
    """
    if macros is None:
        macros = MacroEnvironment()
    env.update(
        {
            Symbol("+"): add,
            Symbol("-"): sub,
            Symbol("*"): mul,
            Symbol("/"): div,
            Symbol("="): equals,
            Symbol("eq"): equals,
            Symbol("<"): lt,
            Symbol(">"): gt,
            Symbol("not"): logical_not,
            Symbol("cons"): cons,
            Symbol("car"): car,
            Symbol("cdr"): cdr,
            Symbol("list"): list_builtin,
            Symbol("vector"): vector_builtin,
            Symbol("make-hash-table"): make_hash_table,
            Symbol("funcall"): make_funcall(macros),
            Symbol("error"): error,
            Symbol("type-of"): type_of_builtin,
            Symbol("make-instance"): make_instance,
            Symbol("slot-value"): slot_value,
            Symbol("set-slot-value"): set_slot_value,
            Symbol("slot-boundp"): slot_boundp,
            Symbol("class-of"): class_of,
        }
    )
