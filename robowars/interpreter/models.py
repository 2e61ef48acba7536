from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from robowars.pieces.types import TeamColour


# --- Interpreter lifecycle ---
class InterpreterState(str, Enum):
    LOADING = "loading"
    RUNNING = "running"
    HALTED = "halted"

class TurnOutcome(str, Enum):
    COMPLETED = "completed"  # token stream exhausted
    ENDED = "ended"          # turn-ending word executed
    FAULTED = "faulted"      # execution fault, turn discarded

class TurnResult(BaseModel):
    piece_id: str
    outcome: TurnOutcome
    steps: int = 0
    stack: list[str] = Field(default_factory=list)
    output: list[str] = Field(default_factory=list)
    fault_type: str | None = None
    fault_message: str | None = None

    @property
    def faulted(self) -> bool:
        return self.outcome == TurnOutcome.FAULTED

# --- Board replies ---
class SpaceStatus(str, Enum):
    EMPTY = "EMPTY"
    OCCUPIED = "OCCUPIED"
    OUT_OF_BOUNDS = "OUT OF BOUNDS"

class ShotReport(BaseModel):
    damage_dealt: int = 0
    enemies_defeated: int = 0

class PieceInfo(BaseModel):
    current_health: int
    distance: int
    direction: int
    team: TeamColour
