"""Piece status and board action words. Only available during play."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from robowars.interpreter.errors import SensingError
from robowars.interpreter.words import Builtin

if TYPE_CHECKING:
    from robowars.interpreter.interpreter import Interpreter

logger = logging.getLogger(__name__)


# --- Status ---

def _status(field: str) -> Callable[[Interpreter], None]:
    def word(interp: Interpreter) -> None:
        interp.push(getattr(interp.piece, field))
    return word


def team_word(interp: Interpreter) -> None:
    interp.push(interp.piece.team.value)


def type_word(interp: Interpreter) -> None:
    interp.push(interp.piece.piece_type.value)


# --- Actions ---

def turn_word(interp: Interpreter) -> None:
    interp.piece.rotate(interp.pop_int())


def move_word(interp: Interpreter) -> None:
    piece = interp.piece
    if piece.current_movement <= 0:
        logger.debug("%s: no movement left", piece.piece_id)
        return
    if interp.board.move_forward(piece.piece_id):
        piece.update_move(1, 0)


def shoot_word(interp: Interpreter) -> None:
    interp.require(2)
    distance = interp.pop_int()
    direction = interp.pop_int()
    piece = interp.piece
    if piece.has_shot:
        logger.debug("%s: already shot this round", piece.piece_id)
        return
    report = interp.board.shoot_space(piece.piece_id, distance, direction)
    if report is not None:
        piece.update_shoot(report.damage_dealt, report.enemies_defeated)


# --- Sensing ---

def check_word(interp: Interpreter) -> None:
    direction = interp.pop_int()
    interp.push(interp.board.check_space(interp.piece_id, direction).value)


def scan_word(interp: Interpreter) -> None:
    interp.push(len(interp.board.scan_area(interp.piece_id)))


def identify_word(interp: Interpreter) -> None:
    index = interp.pop_int()
    visible = interp.board.scan_area(interp.piece_id)
    if not 0 <= index < len(visible):
        raise SensingError(
            f"No visible piece at index {index} ({len(visible)} visible)", "identify!"
        )
    info = interp.board.identify(interp.piece_id, visible[index])
    interp.push(info.current_health)
    interp.push(info.distance)
    interp.push(info.direction)
    interp.push(info.team.value)


PIECE_WORDS: list[Builtin] = [
    Builtin("health", _status("health"), restricted=True),
    Builtin("healthLeft", _status("current_health"), restricted=True),
    Builtin("moves", _status("movement"), restricted=True),
    Builtin("movesLeft", _status("current_movement"), restricted=True),
    Builtin("attack", _status("attack"), restricted=True),
    Builtin("range", _status("attack_range"), restricted=True),
    Builtin("team", team_word, restricted=True),
    Builtin("type", type_word, restricted=True),
    Builtin("turn!", turn_word, restricted=True),
    Builtin("move!", move_word, restricted=True),
    Builtin("shoot!", shoot_word, restricted=True),
    Builtin("check!", check_word, restricted=True),
    Builtin("scan!", scan_word, restricted=True),
    Builtin("identify!", identify_word, restricted=True),
]
