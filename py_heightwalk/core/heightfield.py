"""Fixed-size byte heightfield with bitmask coordinate wraparound."""

import numpy as np
from typing import NamedTuple, Optional, Tuple
from dataclasses import dataclass, field

WIDTH = 64
HEIGHT = 128


class HeightFieldStats(NamedTuple):
    """Summary of a heightfield's contents."""
    min: int
    max: int
    mean: float
    nonzero: int


def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


@dataclass(eq=False)
class HeightField:
    """
    Grid of unsigned 8-bit cells stored row-major (index = y * width + x).

    Width and height must be powers of two: wrapping a coordinate is a
    bitmask with (dimension - 1), never a general modulo.
    """

    width: int = WIDTH
    height: int = HEIGHT
    cells: Optional[np.ndarray] = field(default=None)

    def __post_init__(self):
        if not (_is_power_of_two(self.width) and _is_power_of_two(self.height)):
            raise ValueError(
                f"Heightfield dimensions must be powers of two, got {self.width}x{self.height}"
            )
        size = self.width * self.height
        if self.cells is None:
            self.cells = np.zeros(size, dtype=np.uint8)
        elif self.cells.dtype != np.uint8 or self.cells.shape != (size,):
            raise ValueError(
                f"Expected {size} uint8 cells, got shape {self.cells.shape} dtype {self.cells.dtype}"
            )

    @property
    def x_mask(self) -> int:
        return self.width - 1

    @property
    def y_mask(self) -> int:
        return self.height - 1

    def wrap(self, x: int, y: int) -> Tuple[int, int]:
        """Wrap a coordinate pair into the grid."""
        return x & self.x_mask, y & self.y_mask

    def index(self, x: int, y: int) -> int:
        """Cell index of a (wrapped) coordinate pair."""
        x, y = self.wrap(x, y)
        return y * self.width + x

    def get(self, x: int, y: int) -> int:
        return int(self.cells[self.index(x, y)])

    def set(self, x: int, y: int, value: int) -> None:
        # uint8 storage, values wrap modulo 256
        self.cells[self.index(x, y)] = value & 0xFF

    def as_matrix(self) -> np.ndarray:
        """2-D (height, width) view sharing memory with the cells."""
        return self.cells.reshape(self.height, self.width)

    def to_bytes(self) -> bytes:
        return self.cells.tobytes()

    @classmethod
    def from_bytes(cls, data: bytes, width: int = WIDTH, height: int = HEIGHT) -> "HeightField":
        """Rebuild a heightfield from row-major bytes."""
        cells = np.frombuffer(data, dtype=np.uint8).copy()
        return cls(width=width, height=height, cells=cells)

    def copy(self) -> "HeightField":
        return HeightField(width=self.width, height=self.height, cells=self.cells.copy())

    def stats(self) -> HeightFieldStats:
        return HeightFieldStats(
            min=int(self.cells.min()),
            max=int(self.cells.max()),
            mean=float(self.cells.mean()),
            nonzero=int(np.count_nonzero(self.cells)),
        )

    def __eq__(self, other):
        if not isinstance(other, HeightField):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.cells, other.cells)
        )

    def __len__(self) -> int:
        return self.width * self.height
