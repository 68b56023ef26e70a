"""InsertResult dataclass for bulk insertion."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class InsertResult:
    """
    Result from bulk insertion operations.

    Attributes:
        count: Number of points inserted.
        subdivisions: Number of nodes that split while inserting the batch.
    """

    count: int
    subdivisions: int

    @property
    def subdivided(self) -> bool:
        """True if the batch made any node split."""
        return self.subdivisions > 0
