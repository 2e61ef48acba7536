from __future__ import annotations


class InterpreterError(Exception):
    """Base class for interpreter errors."""
    pass


class WordNameError(InterpreterError, ValueError):
    """A user word or variable was given an unusable name."""
    pass


class ExecutionFault(InterpreterError):
    """A script error that ends the current piece's turn."""

    def __init__(self, message: str, word: str | None = None):
        self.message = message
        self.word = word
        super().__init__(message)


class StackUnderflowError(ExecutionFault):
    """A word needed more operands than the stack holds."""
    pass


class StackOverflowError(ExecutionFault):
    """The stack grew past the configured depth."""
    pass


class OperandTypeError(ExecutionFault):
    """An operand had the wrong type for the word."""
    pass


class DivisionByZeroError(ExecutionFault):
    pass


class UnknownWordError(ExecutionFault):
    """Token is neither a built-in, a user word, a variable nor a literal."""
    pass


class MacroRecursionError(ExecutionFault):
    """User word expansion nested deeper than the configured limit."""
    pass


class StepLimitExceededError(ExecutionFault):
    """The turn used up its step budget."""
    pass


class MalformedBlockError(ExecutionFault):
    """Unterminated or stray control-flow word."""
    pass


class DefinitionError(ExecutionFault):
    """A `:` or `variable` definition could not be made."""
    pass


class RestrictedWordError(ExecutionFault):
    """A piece or board word was used outside of play mode."""
    pass


class SensingError(ExecutionFault):
    """A sensing word asked about something the board cannot see."""
    pass
