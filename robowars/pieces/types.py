"""Piece type templates and team colours."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class PieceType(str, Enum):
    SCOUT = "SCOUT"
    SNIPER = "SNIPER"
    TANK = "TANK"


class TeamColour(str, Enum):
    RED = "RED"
    ORANGE = "ORANGE"
    YELLOW = "YELLOW"
    GREEN = "GREEN"
    BLUE = "BLUE"
    PURPLE = "PURPLE"


class PieceStats(NamedTuple):
    attack: int
    health: int
    movement: int
    attack_range: int


PIECE_STATS: dict[PieceType, PieceStats] = {
    PieceType.SCOUT: PieceStats(attack=1, health=1, movement=3, attack_range=2),
    PieceType.SNIPER: PieceStats(attack=2, health=2, movement=2, attack_range=3),
    PieceType.TANK: PieceStats(attack=3, health=3, movement=1, attack_range=1),
}
