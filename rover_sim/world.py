from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


def is_out_of_bounds(coordinate: int, edge: int) -> bool:
    """True if coordinate lies outside the inclusive range [0, edge]."""
    return coordinate < 0 or coordinate > edge


@dataclass(frozen=True)
class GridBounds:
    """Rectangular grid anchored at the origin.

    Valid cells are x in [0, edge_x] and y in [0, edge_y], both inclusive,
    so GridBounds(0, 0) is a single cell.

    Attributes
    ----------
    edge_x : int
        Largest valid x coordinate.
    edge_y : int
        Largest valid y coordinate.
    """

    edge_x: int
    edge_y: int

    def to_dict(self) -> Dict[str, Any]:
        return {"edge_x": self.edge_x, "edge_y": self.edge_y}

    def contains(self, x: int, y: int) -> bool:
        """Return True if (x, y) is a valid cell."""
        return not (is_out_of_bounds(x, self.edge_x) or is_out_of_bounds(y, self.edge_y))
