"""Stack machine that runs one piece's robot program.

Lifecycle per call:

  LOADING  the token stream is (re)built and turn-scoped state is reset
  RUNNING  tokens are consumed one step at a time; user words are expanded
           in place at the front of the stream
  HALTED   the stream ran out, a turn-ending word ran, or a fault was raised

The stream holds plain tokens plus two kinds of loop markers that control
words splice in behind a loop body. Each token remembers how many user-word
expansions produced it, which bounds runaway recursive definitions.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from robowars.config import Settings, settings as default_settings
from robowars.interpreter.errors import (
    DefinitionError,
    ExecutionFault,
    MacroRecursionError,
    MalformedBlockError,
    OperandTypeError,
    RestrictedWordError,
    StackOverflowError,
    StackUnderflowError,
    StepLimitExceededError,
    UnknownWordError,
)
from robowars.interpreter.message_words import MESSAGE_WORDS
from robowars.interpreter.models import InterpreterState, TurnOutcome, TurnResult
from robowars.interpreter.piece_words import PIECE_WORDS
from robowars.interpreter.stack_words import STACK_WORDS
from robowars.interpreter.tokenizer import (
    Value,
    VariableRef,
    format_value,
    parse_literal,
    tokenize,
)
from robowars.interpreter.words import (
    Builtin,
    Macro,
    UserVariable,
    UserWord,
    Variable,
    WordDictionary,
)

if TYPE_CHECKING:
    from robowars.interpreter.mailbox import Mailbox
    from robowars.interpreter.protocol import BoardView
    from robowars.pieces.piece import Piece

logger = logging.getLogger(__name__)

PLAY_WORD = "play"


@dataclass(frozen=True)
class _Token:
    text: str
    depth: int = 0


@dataclass
class _LoopFrame:
    index: int
    limit: int


@dataclass(frozen=True, eq=False)
class _UntilCheck:
    body: tuple[_Token, ...]


@dataclass(frozen=True, eq=False)
class _LoopNext:
    frame: _LoopFrame
    body: tuple[_Token, ...]


_StreamItem = Union[_Token, _UntilCheck, _LoopNext]


class Interpreter:
    """Runs the program of a single piece for the whole match."""

    def __init__(
        self,
        piece: Piece,
        mailbox: Mailbox,
        *,
        config: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.piece = piece
        self.mailbox = mailbox
        self.settings = config or default_settings
        self.rng = rng or random.Random(self.settings.random_seed)
        self.dictionary = WordDictionary(
            [*self._control_words(), *STACK_WORDS, *PIECE_WORDS, *MESSAGE_WORDS]
        )
        self.state = InterpreterState.HALTED
        self.stack: list[Value] = []
        self.output: list[str] = []
        self._stream: deque[_StreamItem] = deque()
        self._loops: list[_LoopFrame] = []
        self._steps = 0
        self._current_word: str | None = None
        self._play_mode = False
        self._board: BoardView | None = None

    @property
    def piece_id(self) -> str:
        return self.piece.piece_id

    @property
    def board(self) -> BoardView:
        if self._board is None:
            raise RestrictedWordError(
                "No board available outside of a turn", self._current_word
            )
        return self._board

    # ------------------------------------------------------------------ #
    #  Public entry points
    # ------------------------------------------------------------------ #

    def initialize(self, script: str) -> TurnResult:
        """Load a program: run its definitions and top-level code once.

        Piece and board words are not available here. An empty ``play``
        word is added if the program does not define one.
        """
        result = self._execute(tokenize(script), board=None)
        if self.dictionary.get_word(PLAY_WORD) is None:
            logger.warning("%s: no play word defined, adding a blank one", self.piece_id)
            self.dictionary.define_word(UserWord(PLAY_WORD))
        logger.info(
            "%s: program loaded (%d words, %d variables)",
            self.piece_id,
            len(self.dictionary.user_words()),
            len(self.dictionary.user_variables()),
        )
        return result

    def play_turn(self, board: BoardView) -> TurnResult:
        """Run the ``play`` word for one turn against *board*."""
        logger.debug("%s: turn starts at %s", self.piece_id, board.position(self.piece_id))
        return self._execute([PLAY_WORD], board=board)

    # ------------------------------------------------------------------ #
    #  Turn state machine
    # ------------------------------------------------------------------ #

    def _execute(self, tokens: list[str], board: BoardView | None) -> TurnResult:
        self.state = InterpreterState.LOADING
        self.stack.clear()
        self.output = []
        self._loops.clear()
        self._stream = deque(_Token(t) for t in tokens)
        self._steps = 0
        self._current_word = None
        self._board = board
        self._play_mode = board is not None

        try:
            outcome = self._run()
        except ExecutionFault as fault:
            logger.warning(
                "%s: turn faulted on %r: %s (%s)",
                self.piece_id, fault.word, fault.message, type(fault).__name__,
            )
            return self._result(
                TurnOutcome.FAULTED,
                fault_type=type(fault).__name__,
                fault_message=fault.message,
            )
        finally:
            self.state = InterpreterState.HALTED
            self._board = None
            self._play_mode = False
            self._stream.clear()

        return self._result(outcome)

    def _run(self) -> TurnOutcome:
        self.state = InterpreterState.RUNNING
        while self._stream:
            if self._steps >= self.settings.max_steps_per_turn:
                raise StepLimitExceededError(
                    f"Exceeded {self.settings.max_steps_per_turn} steps", self._current_word
                )
            self._steps += 1
            if self._step(self._stream.popleft()) is InterpreterState.HALTED:
                return TurnOutcome.ENDED
        return TurnOutcome.COMPLETED

    def _step(self, item: _StreamItem) -> InterpreterState | None:
        if isinstance(item, _UntilCheck):
            return self._check_until(item)
        if isinstance(item, _LoopNext):
            return self._next_iteration(item)
        return self._dispatch(item)

    def _dispatch(self, token: _Token) -> InterpreterState | None:
        self._current_word = token.text
        entry = self.dictionary.lookup(token.text)

        if isinstance(entry, Builtin):
            if entry.restricted and not self._play_mode:
                raise RestrictedWordError(
                    f"'{entry.name}' can only be used during play", token.text
                )
            return entry.fn(self)

        if isinstance(entry, Macro):
            self._expand(entry.word, token.depth)
            return None

        if isinstance(entry, Variable):
            self.push(VariableRef(entry.var.name))
            return None

        value = parse_literal(token.text)
        if value is None:
            raise UnknownWordError(f"Unknown word '{token.text}'", token.text)
        self.push(value)
        return None

    def _expand(self, word: UserWord, depth: int) -> None:
        depth += 1
        if depth > self.settings.max_expansion_depth:
            raise MacroRecursionError(
                f"'{word.name}' expanded more than "
                f"{self.settings.max_expansion_depth} levels deep",
                word.name,
            )
        self._push_front([_Token(t, depth) for t in word.tokens])

    def _result(self, outcome: TurnOutcome, **fault: str) -> TurnResult:
        return TurnResult(
            piece_id=self.piece_id,
            outcome=outcome,
            steps=self._steps,
            stack=[format_value(v) for v in self.stack],
            output=list(self.output),
            **fault,
        )

    # ------------------------------------------------------------------ #
    #  Stack access for word implementations
    # ------------------------------------------------------------------ #

    def push(self, value: Value) -> None:
        if len(self.stack) >= self.settings.max_stack_depth:
            raise StackOverflowError(
                f"Stack deeper than {self.settings.max_stack_depth}", self._current_word
            )
        self.stack.append(value)

    def require(self, count: int) -> None:
        if len(self.stack) < count:
            raise StackUnderflowError(
                f"'{self._current_word}' needs {count} values, stack has {len(self.stack)}",
                self._current_word,
            )

    def pop(self) -> Value:
        self.require(1)
        return self.stack.pop()

    def pop_int(self) -> int:
        value = self.pop()
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._type_error("an integer", value)
        return value

    def pop_bool(self) -> bool:
        value = self.pop()
        if not isinstance(value, bool):
            raise self._type_error("a boolean", value)
        return value

    def pop_str(self) -> str:
        value = self.pop()
        if not isinstance(value, str):
            raise self._type_error("a string", value)
        return value

    def pop_address(self) -> VariableRef:
        value = self.pop()
        if not isinstance(value, VariableRef):
            raise self._type_error("a variable address", value)
        return value

    def emit(self, value: Value) -> None:
        text = format_value(value)
        self.output.append(text)
        logger.info("%s: %s", self.piece_id, text)

    def _type_error(self, expected: str, value: Value) -> OperandTypeError:
        return OperandTypeError(
            f"'{self._current_word}' expected {expected}, got {format_value(value)!r}",
            self._current_word,
        )

    # ------------------------------------------------------------------ #
    #  Token stream helpers
    # ------------------------------------------------------------------ #

    def _push_front(self, items: list[_StreamItem]) -> None:
        self._stream.extendleft(reversed(items))

    def _next_token(self) -> _Token:
        if not self._stream or not isinstance(self._stream[0], _Token):
            raise MalformedBlockError(
                f"'{self._current_word}' is missing its name", self._current_word
            )
        return self._stream.popleft()

    def _collect_block(
        self,
        opener: str,
        closers: tuple[str, ...],
    ) -> tuple[list[_Token], str]:
        """Take tokens up to the matching closer; return them and the closer.

        Nested blocks of the same kind are kept whole inside the body.
        """
        word = self._current_word
        body: list[_Token] = []
        depth = 0
        while self._stream and isinstance(self._stream[0], _Token):
            token = self._stream.popleft()
            key = token.text.casefold()
            if key == opener:
                depth += 1
            elif depth == 0 and key in closers:
                return body, key
            elif depth > 0 and key == closers[-1]:
                depth -= 1
            body.append(token)
        raise MalformedBlockError(
            f"'{word}' without matching '{closers[-1]}'", word
        )

    # ------------------------------------------------------------------ #
    #  Control words
    # ------------------------------------------------------------------ #

    def _control_words(self) -> list[Builtin]:
        return [
            Builtin(":", Interpreter._define_word),
            Builtin(";", Interpreter._stray_word),
            Builtin("variable", Interpreter._declare_variable),
            Builtin("if", Interpreter._if_block),
            Builtin("else", Interpreter._stray_word),
            Builtin("then", Interpreter._stray_word),
            Builtin("begin", Interpreter._begin_block),
            Builtin("until", Interpreter._stray_word),
            Builtin("do", Interpreter._do_block),
            Builtin("loop", Interpreter._stray_word),
            Builtin("I", Interpreter._loop_index),
            Builtin("leave", Interpreter._leave_loop),
            Builtin("endturn", Interpreter._end_turn),
        ]

    def _check_name(self, name: str) -> None:
        if parse_literal(name) is not None:
            raise DefinitionError(f"'{name}' is a literal, not a name", self._current_word)
        if self.dictionary.is_builtin(name):
            raise DefinitionError(f"'{name}' is a built-in word", self._current_word)

    def _define_word(self) -> None:
        name = self._next_token().text
        self._check_name(name)
        body: list[str] = []
        while self._stream and isinstance(self._stream[0], _Token):
            token = self._stream.popleft()
            key = token.text.casefold()
            if key == ";":
                self.dictionary.define_word(UserWord(name, body))
                logger.debug("%s: defined %s = %s", self.piece_id, name, body)
                return
            if key == ":":
                raise MalformedBlockError(f"Nested ':' inside '{name}'", ":")
            body.append(token.text)
        raise MalformedBlockError(f"Definition of '{name}' has no ';'", ":")

    def _declare_variable(self) -> None:
        name = self._next_token().text
        self._check_name(name)
        self.dictionary.define_variable(UserVariable(name))

    def _stray_word(self) -> None:
        raise MalformedBlockError(
            f"'{self._current_word}' without a matching opening word", self._current_word
        )

    def _if_block(self) -> None:
        condition = self.pop_bool()
        true_branch, closer = self._collect_block("if", ("else", "then"))
        false_branch: list[_Token] = []
        if closer == "else":
            false_branch, _ = self._collect_block("if", ("then",))
        self._push_front(true_branch if condition else false_branch)

    def _begin_block(self) -> None:
        body, _ = self._collect_block("begin", ("until",))
        marker = _UntilCheck(tuple(body))
        self._push_front([*body, marker])

    def _check_until(self, marker: _UntilCheck) -> None:
        self._current_word = "until"
        if not self.pop_bool():
            self._push_front([*marker.body, marker])

    def _do_block(self) -> None:
        start = self.pop_int()
        limit = self.pop_int()
        body, _ = self._collect_block("do", ("loop",))
        if start > limit:
            return
        frame = _LoopFrame(index=start, limit=limit)
        self._loops.append(frame)
        self._push_front([*body, _LoopNext(frame, tuple(body))])

    def _next_iteration(self, marker: _LoopNext) -> None:
        marker.frame.index += 1
        if marker.frame.index <= marker.frame.limit:
            self._push_front([*marker.body, marker])
        else:
            self._loops.pop()

    def _loop_index(self) -> None:
        if not self._loops:
            raise MalformedBlockError("'I' used outside of a do loop", self._current_word)
        self.push(self._loops[-1].index)

    def _leave_loop(self) -> None:
        if not self._loops:
            raise MalformedBlockError("'leave' used outside of a do loop", self._current_word)
        frame = self._loops[-1]
        while self._stream:
            item = self._stream.popleft()
            if isinstance(item, _LoopNext) and item.frame is frame:
                self._loops.pop()
                return
        raise MalformedBlockError("Loop end marker missing", self._current_word)

    def _end_turn(self) -> InterpreterState:
        return InterpreterState.HALTED
