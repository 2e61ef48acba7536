from __future__ import annotations

import random

import pytest

from robowars.board.hex_coord import HexCoord
from robowars.config import Settings
from robowars.interpreter.interpreter import Interpreter
from robowars.interpreter.mailbox import MailboxDirectory
from robowars.interpreter.models import PieceInfo, ShotReport, SpaceStatus
from robowars.pieces.piece import Piece
from robowars.pieces.types import PieceType, TeamColour


class GridBoard:
    """Hexagonal board of a given radius around the origin.

    Positions are kept in reduced form. Every other living piece is visible
    to scan!, sorted by ID.
    """

    def __init__(self, radius: int = 3):
        self.radius = radius
        self.pieces: dict[str, Piece] = {}
        self.positions: dict[str, HexCoord] = {}

    def place(self, piece: Piece, coord: HexCoord) -> None:
        self.pieces[piece.piece_id] = piece
        self.positions[piece.piece_id] = coord.reduced()

    def in_bounds(self, coord: HexCoord) -> bool:
        return HexCoord().distance_to(coord) <= self.radius

    def occupant(self, coord: HexCoord) -> Piece | None:
        target = coord.reduced()
        for piece_id, position in self.positions.items():
            if position == target and self.pieces[piece_id].is_alive:
                return self.pieces[piece_id]
        return None

    def _walk(self, piece_id: str, direction: int, distance: int) -> HexCoord:
        piece = self.pieces[piece_id]
        coord = self.positions[piece_id]
        for _ in range(distance):
            coord = coord.neighbor(piece.absolute_rotation(direction))
        return coord.reduced()

    # --- BoardView ---

    def position(self, piece_id: str) -> HexCoord:
        return self.positions[piece_id].copy()

    def move_forward(self, piece_id: str) -> bool:
        target = self._walk(piece_id, 0, 1)
        if not self.in_bounds(target) or self.occupant(target) is not None:
            return False
        self.positions[piece_id] = target
        return True

    def shoot_space(self, piece_id: str, distance: int, direction: int) -> ShotReport | None:
        shooter = self.pieces[piece_id]
        if not 1 <= distance <= shooter.attack_range:
            return None
        target = self._walk(piece_id, direction, distance)
        if not self.in_bounds(target):
            return None
        victim = self.occupant(target)
        if victim is None:
            return ShotReport()
        victim.take_damage(shooter.attack)
        return ShotReport(
            damage_dealt=shooter.attack,
            enemies_defeated=1 if victim.death_flag else 0,
        )

    def check_space(self, piece_id: str, direction: int) -> SpaceStatus:
        target = self._walk(piece_id, direction, 1)
        if not self.in_bounds(target):
            return SpaceStatus.OUT_OF_BOUNDS
        if self.occupant(target) is not None:
            return SpaceStatus.OCCUPIED
        return SpaceStatus.EMPTY

    def scan_area(self, piece_id: str) -> list[str]:
        return sorted(
            other for other, piece in self.pieces.items()
            if other != piece_id and piece.is_alive
        )

    def identify(self, piece_id: str, target_id: str) -> PieceInfo:
        target = self.pieces[target_id]
        distance = self.positions[piece_id].distance_to(self.positions[target_id])
        direction = -1
        for rel in range(6):
            if self._walk(piece_id, rel, distance) == self.positions[target_id]:
                direction = rel
                break
        return PieceInfo(
            current_health=target.current_health,
            distance=distance,
            direction=direction,
            team=target.team,
        )


@pytest.fixture
def config():
    return Settings(
        mailbox_capacity=6,
        max_steps_per_turn=2_000,
        max_expansion_depth=16,
        max_stack_depth=64,
        random_seed=7,
    )


@pytest.fixture
def board():
    return GridBoard(radius=3)


@pytest.fixture
def directory():
    return MailboxDirectory()


@pytest.fixture
def make_interpreter(config, directory, board):
    """Factory: an Interpreter for a new piece placed on the board."""

    def _make(
        piece_id: str = "red0",
        piece_type: PieceType = PieceType.SNIPER,
        team: TeamColour = TeamColour.RED,
        at: HexCoord | None = None,
    ) -> Interpreter:
        piece = Piece.from_type(piece_id, piece_type, team)
        board.place(piece, at or HexCoord())
        mailbox = directory.create(piece_id, config.mailbox_capacity)
        return Interpreter(piece, mailbox, config=config, rng=random.Random(config.random_seed))

    return _make


@pytest.fixture
def interp(make_interpreter):
    return make_interpreter()
