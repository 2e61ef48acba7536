"""Cube hex coordinates with the reduced (y == 0) normal form.

A coordinate is any walk of x, y and z unit steps. One +y step is the same
hex offset as one +x step plus one +z step, so every coordinate can be
*reduced* to a form with y == 0. The board collaborator stores reduced
coordinates and uses the vector form to measure paths.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class HexCoord:
    x: int = 0
    y: int = 0
    z: int = 0

    def reduce(self) -> None:
        """Fold y into x and z in place."""
        self.x += self.y
        self.z += self.y
        self.y = 0

    def to_vector(self) -> None:
        """Rewrite in place as the shortest walk from the origin.

        Only a reduced form whose x and z share a strict sign can be
        shortened, by turning the common part back into y steps.
        """
        self.reduce()

        if (self.x <= 0 and self.z >= 0) or (self.x >= 0 and self.z <= 0):
            return

        if self.x < 0 and self.z < 0:
            self.y = max(self.x, self.z)
        else:
            self.y = min(self.x, self.z)
        self.x -= self.y
        self.z -= self.y

    def is_same_as(self, other: HexCoord) -> bool:
        """Compare two coordinates by their reduced forms.

        Both operands are reduced in place.
        """
        other.reduce()
        self.reduce()
        return self.x == other.x and self.y == other.y and self.z == other.z

    # ── Non-mutating algebra ──

    def copy(self) -> HexCoord:
        return HexCoord(self.x, self.y, self.z)

    def reduced(self) -> HexCoord:
        coord = self.copy()
        coord.reduce()
        return coord

    def neighbor(self, rotation: int) -> HexCoord:
        """Return the adjacent coordinate one step in absolute *rotation*."""
        dx, dy, dz = ROTATION_STEPS[rotation % 6]
        return HexCoord(self.x + dx, self.y + dy, self.z + dz)

    def displacement(self, other: HexCoord) -> HexCoord:
        """Shortest vector from this coordinate to *other*."""
        vector = HexCoord(other.x - self.x, other.y - self.y, other.z - self.z)
        vector.to_vector()
        return vector

    def distance_to(self, other: HexCoord) -> int:
        """Number of hex steps between this coordinate and *other*."""
        vector = self.displacement(other)
        return abs(vector.x) + abs(vector.y) + abs(vector.z)

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


# Unit steps indexed by absolute rotation 0-5.
ROTATION_STEPS: list[tuple[int, int, int]] = [
    (1, 0, 0), (0, 1, 0), (0, 0, 1), (-1, 0, 0), (0, -1, 0), (0, 0, -1),
]
