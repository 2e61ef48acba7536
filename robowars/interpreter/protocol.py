from __future__ import annotations

from typing import Protocol, runtime_checkable

from robowars.board.hex_coord import HexCoord
from robowars.interpreter.models import PieceInfo, ShotReport, SpaceStatus


@runtime_checkable
class BoardView(Protocol):
    """What the board offers a piece's program during one turn.

    Directions are relative to the acting piece's rotation. The board owns
    positions and legality; the interpreter owns the Piece bookkeeping.
    """

    def position(self, piece_id: str) -> HexCoord:
        """Current position of the piece, in reduced form."""
        ...

    def move_forward(self, piece_id: str) -> bool:
        """Move the piece one space along its rotation. False if illegal."""
        ...

    def shoot_space(
        self,
        piece_id: str,
        distance: int,
        direction: int,
    ) -> ShotReport | None:
        """Shoot the space at *distance* in *direction*. None if illegal."""
        ...

    def check_space(self, piece_id: str, direction: int) -> SpaceStatus:
        ...

    def scan_area(self, piece_id: str) -> list[str]:
        """IDs of the living pieces the acting piece can see."""
        ...

    def identify(self, piece_id: str, target_id: str) -> PieceInfo:
        ...
