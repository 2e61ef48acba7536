"""Arithmetic, logic, stack, variable and output words.

Binary words take the top of the stack as their left operand:
``a b -`` computes ``b - a``.
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Callable

from robowars.interpreter.errors import DefinitionError, DivisionByZeroError, OperandTypeError
from robowars.interpreter.tokenizer import Value, VariableRef, format_value
from robowars.interpreter.words import Builtin

if TYPE_CHECKING:
    from robowars.interpreter.interpreter import Interpreter


# ── Arithmetic ──

def _arithmetic(op: Callable[[int, int], int]) -> Callable[[Interpreter], None]:
    def word(interp: Interpreter) -> None:
        interp.require(2)
        top = interp.pop_int()
        second = interp.pop_int()
        interp.push(op(top, second))
    return word


def divmod_word(interp: Interpreter) -> None:
    interp.require(2)
    top = interp.pop_int()
    second = interp.pop_int()
    if second == 0:
        raise DivisionByZeroError(f"{top} divided by zero", "/mod")
    quotient = abs(top) // abs(second)
    if (top < 0) != (second < 0):
        quotient = -quotient
    interp.push(top - second * quotient)
    interp.push(quotient)


def random_word(interp: Interpreter) -> None:
    bound = interp.pop_int()
    interp.push(interp.rng.randrange(bound) if bound > 0 else 0)


# ── Logic ──

def and_word(interp: Interpreter) -> None:
    interp.require(2)
    top = interp.pop_bool()
    second = interp.pop_bool()
    interp.push(top and second)


def or_word(interp: Interpreter) -> None:
    interp.require(2)
    top = interp.pop_bool()
    second = interp.pop_bool()
    interp.push(top or second)


def invert_word(interp: Interpreter) -> None:
    interp.push(not interp.pop_bool())


# ── Comparison ──

def _ordering(op: Callable[[object, object], bool], name: str) -> Callable[[Interpreter], None]:
    def word(interp: Interpreter) -> None:
        interp.require(2)
        top = interp.pop()
        second = interp.pop()
        if not _comparable(top, second):
            raise OperandTypeError(
                f"Cannot compare {format_value(top)!r} with {format_value(second)!r}", name
            )
        interp.push(op(top, second))
    return word


def _comparable(a: Value, b: Value) -> bool:
    if isinstance(a, (bool, VariableRef)) or isinstance(b, (bool, VariableRef)):
        return False
    return type(a) is type(b)


def _equality(negate: bool, name: str) -> Callable[[Interpreter], None]:
    def word(interp: Interpreter) -> None:
        interp.require(2)
        top = interp.pop()
        second = interp.pop()
        if isinstance(top, VariableRef) or isinstance(second, VariableRef):
            raise OperandTypeError("Variable addresses cannot be compared", name)
        # True == 1 in Python; values of different types are never equal here
        equal = type(top) is type(second) and top == second
        interp.push(equal != negate)
    return word


# ── Stack ──

def dup_word(interp: Interpreter) -> None:
    interp.require(1)
    interp.push(interp.stack[-1])


def drop_word(interp: Interpreter) -> None:
    interp.pop()


def swap_word(interp: Interpreter) -> None:
    interp.require(2)
    stack = interp.stack
    stack[-1], stack[-2] = stack[-2], stack[-1]


def rot_word(interp: Interpreter) -> None:
    """( a b c -- b c a )"""
    interp.require(3)
    interp.stack.append(interp.stack.pop(-3))


# ── Variables ──

def store_word(interp: Interpreter) -> None:
    interp.require(2)
    address = interp.pop_address()
    value = interp.pop()
    _variable_at(interp, address).value = value


def fetch_word(interp: Interpreter) -> None:
    address = interp.pop_address()
    interp.push(_variable_at(interp, address).value)


def _variable_at(interp: Interpreter, address: VariableRef):
    var = interp.dictionary.get_variable(address.name)
    if var is None:
        raise DefinitionError(f"No variable named '{address.name}'", str(address))
    return var


# ── Output ──

def print_word(interp: Interpreter) -> None:
    interp.emit(interp.pop())


STACK_WORDS: list[Builtin] = [
    Builtin("+", _arithmetic(operator.add)),
    Builtin("-", _arithmetic(operator.sub)),
    Builtin("*", _arithmetic(operator.mul)),
    Builtin("/mod", divmod_word),
    Builtin("random", random_word),
    Builtin("and", and_word),
    Builtin("or", or_word),
    Builtin("invert", invert_word),
    Builtin(">", _ordering(operator.gt, ">")),
    Builtin(">=", _ordering(operator.ge, ">=")),
    Builtin("<", _ordering(operator.lt, "<")),
    Builtin("<=", _ordering(operator.le, "<=")),
    Builtin("=", _equality(False, "=")),
    Builtin("<>", _equality(True, "<>")),
    Builtin("dup", dup_word),
    Builtin("drop", drop_word),
    Builtin("swap", swap_word),
    Builtin("rot", rot_word),
    Builtin("!", store_word),
    Builtin("?", fetch_word),
    Builtin(".", print_word),
]
