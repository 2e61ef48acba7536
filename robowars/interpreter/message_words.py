"""Words for talking to teammates through the mailbox directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from robowars.interpreter.tokenizer import format_value, parse_payload
from robowars.interpreter.words import Builtin

if TYPE_CHECKING:
    from robowars.interpreter.interpreter import Interpreter


def send_word(interp: Interpreter) -> None:
    """message recipient -- ok"""
    interp.require(2)
    recipient = interp.pop_str()
    message = interp.pop()
    interp.push(interp.mailbox.send_message(recipient, format_value(message)))


def has_message_word(interp: Interpreter) -> None:
    """sender -- flag"""
    interp.push(interp.mailbox.has_message(interp.pop_str()))


def receive_word(interp: Interpreter) -> None:
    """sender -- message, or nothing when no message is waiting"""
    payload = interp.mailbox.receive_message(interp.pop_str())
    if payload is not None:
        interp.push(parse_payload(payload))


MESSAGE_WORDS: list[Builtin] = [
    Builtin("send!", send_word),
    Builtin("mesg?", has_message_word),
    Builtin("recv!", receive_word),
]
