from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Sequence

from robowars.config import Settings, settings as default_settings
from robowars.interpreter.interpreter import Interpreter
from robowars.interpreter.mailbox import MailboxDirectory
from robowars.interpreter.models import TurnResult
from robowars.pieces.piece import Piece
from robowars.pieces.types import PieceType, TeamColour

if TYPE_CHECKING:
    from robowars.interpreter.protocol import BoardView

logger = logging.getLogger(__name__)


class Team:
    """One colour's pieces, each with its own mailbox and interpreter.

    Teams in the same match share a MailboxDirectory so that programs can
    address any living piece by ID. Piece IDs are ``<colour><index>``,
    e.g. ``red0``.
    """

    def __init__(
        self,
        colour: TeamColour,
        piece_types: Sequence[PieceType],
        *,
        directory: MailboxDirectory | None = None,
        config: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.colour = colour
        self.settings = config or default_settings
        self.directory = directory if directory is not None else MailboxDirectory()
        rng = rng or random.Random(self.settings.random_seed)

        self.pieces: list[Piece] = []
        self.interpreters: list[Interpreter] = []
        for index, piece_type in enumerate(piece_types):
            piece = Piece.from_type(f"{colour.value.lower()}{index}", piece_type, colour)
            mailbox = self.directory.create(piece.piece_id, self.settings.mailbox_capacity)
            self.pieces.append(piece)
            self.interpreters.append(
                Interpreter(piece, mailbox, config=self.settings, rng=rng)
            )

    def __len__(self) -> int:
        return len(self.pieces)

    def load_programs(self, scripts: Sequence[str]) -> list[TurnResult]:
        """Initialize each piece's interpreter with its script, in order."""
        if len(scripts) != len(self.pieces):
            raise ValueError(
                f"Team {self.colour.value} has {len(self.pieces)} pieces "
                f"but {len(scripts)} scripts were given"
            )
        return [
            interp.initialize(script)
            for interp, script in zip(self.interpreters, scripts)
        ]

    def play(self, index: int, board: BoardView) -> TurnResult:
        """Run one turn for the piece at *index* and mark its turn finished."""
        piece = self.pieces[index]
        if not piece.is_available_for_turn:
            raise ValueError(f"{piece.piece_id} cannot take a turn now")
        result = self.interpreters[index].play_turn(board)
        piece.end_turn()
        logger.debug("%s: turn %s in %d steps", piece.piece_id, result.outcome.value, result.steps)
        return result

    def reset_round(self) -> None:
        for piece in self.living_pieces():
            piece.reset_round()

    def process_death_flags(self) -> list[Piece]:
        """Kill flagged pieces and close their mailboxes. Returns the newly dead."""
        died = []
        for piece in self.pieces:
            if piece.is_alive and piece.death_flag:
                piece.process_death_flag()
                self.directory.close(piece.piece_id)
                logger.info("%s destroyed", piece.piece_id)
                died.append(piece)
        return died

    def living_pieces(self) -> list[Piece]:
        return [p for p in self.pieces if p.is_alive]

    @property
    def is_eliminated(self) -> bool:
        return not self.living_pieces()
