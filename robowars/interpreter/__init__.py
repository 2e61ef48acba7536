from __future__ import annotations

from robowars.interpreter.errors import ExecutionFault, InterpreterError, WordNameError
from robowars.interpreter.interpreter import Interpreter
from robowars.interpreter.mailbox import Mailbox, MailboxDirectory
from robowars.interpreter.models import (
    InterpreterState,
    PieceInfo,
    ShotReport,
    SpaceStatus,
    TurnOutcome,
    TurnResult,
)
from robowars.interpreter.protocol import BoardView
from robowars.interpreter.words import UserVariable, UserWord, WordDictionary

__all__ = [
    "Interpreter",
    "InterpreterState",
    "TurnOutcome",
    "TurnResult",
    "BoardView",
    "SpaceStatus",
    "ShotReport",
    "PieceInfo",
    "Mailbox",
    "MailboxDirectory",
    "UserWord",
    "UserVariable",
    "WordDictionary",
    "InterpreterError",
    "ExecutionFault",
    "WordNameError",
]
