"""
Matrix value type: an immutable square grid of QR modules.

Coordinates are (x, y) with x the column and y the row. Lookups outside the
grid read as unset so renderers can treat the quiet zone like any other
module.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from qrgen.domain.models import ErrorCorrection


@dataclass(frozen=True)
class Matrix:
    size: int
    modules: Tuple[Tuple[bool, ...], ...]
    version: int = 0
    error_correction: ErrorCorrection = ErrorCorrection.HIGH
    mask: int = -1

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Sequence[object]],
        version: int = 0,
        error_correction: ErrorCorrection = ErrorCorrection.HIGH,
        mask: int = -1,
    ) -> "Matrix":
        """Build a Matrix from row-major truthy values, checking it is square."""
        grid = tuple(tuple(bool(cell) for cell in row) for row in rows)
        size = len(grid)
        if size == 0:
            raise ValueError("Matrix must have at least one module")
        if any(len(row) != size for row in grid):
            raise ValueError(f"Matrix must be square, got {size} rows of uneven width")
        return cls(
            size=size,
            modules=grid,
            version=version,
            error_correction=error_correction,
            mask=mask,
        )

    def get_module(self, x: int, y: int) -> bool:
        if 0 <= x < self.size and 0 <= y < self.size:
            return self.modules[y][x]
        return False

    def describe(self) -> str:
        return (
            f"size={self.size} version={self.version} "
            f"ecc={self.error_correction.value} mask={self.mask}"
        )


__all__ = ["Matrix"]
