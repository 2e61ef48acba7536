from __future__ import annotations

from pydantic import BaseModel

from robowars.pieces.types import PIECE_STATS, PieceType, TeamColour


class Piece(BaseModel):
    """A robot on the board.

    Static stats come from the piece type. Everything else is mutated by
    the interpreter's built-in words and by the board during a match.
    """

    piece_id: str
    piece_type: PieceType
    team: TeamColour

    # --- Static stats ---
    attack: int
    health: int
    movement: int
    attack_range: int

    # --- Dynamic state ---
    current_health: int
    current_movement: int
    is_alive: bool = True
    rotation: int = 0
    has_shot: bool = False
    turn_finished: bool = False
    death_flag: bool = False

    # --- Cumulative counters ---
    damage_dealt: int = 0
    damage_taken: int = 0
    spaces_moved: int = 0
    enemies_defeated: int = 0
    turns_taken: int = 0

    @classmethod
    def from_type(cls, piece_id: str, piece_type: PieceType, team: TeamColour) -> Piece:
        stats = PIECE_STATS[piece_type]
        return cls(
            piece_id=piece_id,
            piece_type=piece_type,
            team=team,
            attack=stats.attack,
            health=stats.health,
            movement=stats.movement,
            attack_range=stats.attack_range,
            current_health=stats.health,
            current_movement=stats.movement,
        )

    # ── Rotation ──

    def absolute_rotation(self, direction: int) -> int:
        """Absolute rotation (0-5) after turning *direction* steps."""
        return (self.rotation + direction) % 6

    def rotate(self, direction: int) -> None:
        self.rotation = self.absolute_rotation(direction)

    # ── Turn bookkeeping ──

    def update_move(self, spaces_moved: int, relative_direction: int) -> None:
        self.spaces_moved += spaces_moved
        self.current_movement -= spaces_moved
        self.rotate(relative_direction)

    def update_shoot(self, damage_dealt: int, enemies_defeated: int) -> None:
        self.damage_dealt += damage_dealt
        self.enemies_defeated += enemies_defeated
        self.has_shot = True

    def take_damage(self, damage: int) -> None:
        """Apply damage. Death is deferred to process_death_flag()."""
        self.damage_taken += damage
        self.current_health -= damage
        if self.current_health <= 0:
            self.current_health = 0
            self.death_flag = True

    def process_death_flag(self) -> None:
        if self.death_flag:
            self.is_alive = False

    def end_turn(self) -> None:
        self.turns_taken += 1
        self.turn_finished = True

    def reset_round(self) -> None:
        self.current_movement = self.movement
        self.has_shot = False
        self.turn_finished = False

    @property
    def is_available_for_turn(self) -> bool:
        return not self.turn_finished and self.is_alive
