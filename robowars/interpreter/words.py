"""User words, user variables and the interpreter's word dictionary.

Every name resolves through one case-insensitive mapping to a tagged
entry: a ``Builtin`` (a Python callable), a ``Macro`` (a UserWord whose
tokens are inlined) or a ``Variable`` (a UserVariable whose address is
pushed).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Union

from robowars.interpreter.errors import WordNameError

if TYPE_CHECKING:
    from robowars.interpreter.interpreter import Interpreter
    from robowars.interpreter.models import InterpreterState

WordFn = Callable[["Interpreter"], "InterpreterState | None"]


class UserWord:
    """A named macro: the name is replaced by its tokens wherever it appears."""

    def __init__(self, name: str, tokens: Iterable[str] = ()) -> None:
        if not name:
            raise WordNameError("Cannot create a UserWord with a blank name.")
        self._name = name
        self._tokens: tuple[str, ...] = tuple(tokens)

    @property
    def name(self) -> str:
        return self._name

    @property
    def tokens(self) -> tuple[str, ...]:
        return self._tokens

    @tokens.setter
    def tokens(self, tokens: Iterable[str]) -> None:
        self._tokens = tuple(tokens)

    def __repr__(self) -> str:
        return f"UserWord({self._name!r}, {list(self._tokens)!r})"


class UserVariable:
    def __init__(self, name: str, value: object = 0) -> None:
        if not name:
            raise WordNameError("Cannot create a UserVariable with a blank name.")
        self.name = name
        self.value = value

    def __repr__(self) -> str:
        return f"UserVariable({self.name!r}, {self.value!r})"


@dataclass(frozen=True)
class Builtin:
    name: str
    fn: WordFn
    restricted: bool = False


@dataclass(frozen=True)
class Macro:
    word: UserWord


@dataclass(frozen=True)
class Variable:
    var: UserVariable


DictionaryEntry = Union[Builtin, Macro, Variable]


class WordDictionary:
    """Built-ins merged with user definitions; built-ins always win."""

    def __init__(self, builtins: Iterable[Builtin] = ()) -> None:
        self._builtins: dict[str, Builtin] = {}
        self._user: dict[str, Macro | Variable] = {}
        for builtin in builtins:
            self.add_builtin(builtin)

    def add_builtin(self, builtin: Builtin) -> None:
        key = builtin.name.casefold()
        if key in self._builtins:
            raise ValueError(f"Built-in '{builtin.name}' already registered")
        self._builtins[key] = builtin

    def lookup(self, name: str) -> DictionaryEntry | None:
        key = name.casefold()
        builtin = self._builtins.get(key)
        if builtin is not None:
            return builtin
        return self._user.get(key)

    def is_builtin(self, name: str) -> bool:
        return name.casefold() in self._builtins

    def define_word(self, word: UserWord) -> None:
        """Add *word*, or replace the tokens of an existing word of that name."""
        key = word.name.casefold()
        existing = self._user.get(key)
        if isinstance(existing, Macro):
            existing.word.tokens = word.tokens
            return
        self._user[key] = Macro(word)

    def define_variable(self, var: UserVariable) -> None:
        key = var.name.casefold()
        if isinstance(self._user.get(key), Variable):
            return
        self._user[key] = Variable(var)

    def get_word(self, name: str) -> UserWord | None:
        entry = self._user.get(name.casefold())
        return entry.word if isinstance(entry, Macro) else None

    def get_variable(self, name: str) -> UserVariable | None:
        entry = self._user.get(name.casefold())
        return entry.var if isinstance(entry, Variable) else None

    def user_words(self) -> list[UserWord]:
        return [e.word for e in self._user.values() if isinstance(e, Macro)]

    def user_variables(self) -> list[UserVariable]:
        return [e.var for e in self._user.values() if isinstance(e, Variable)]

    def builtin_names(self) -> list[str]:
        return [b.name for b in self._builtins.values()]
