"""
Multiplicative 32-bit PRNG used by the terrain random walk.

The generator keeps a single 32-bit word of state. Every draw multiplies
it by a fixed constant with unsigned wraparound and exposes 15 bits from
the middle of the word. Output must match the historical game exactly,
so Python's random and NumPy's random are never used for terrain.
"""

from .errors import InvalidParameterError

DEFAULT_SEED = 12345678
MULTIPLIER = 3141592621

_MASK32 = 0xFFFFFFFF


def _uint32(n: int) -> int:
    """Convert to unsigned 32-bit integer."""
    return n & _MASK32


class WalkPRNG:
    """
    Seeded generator producing values in [0, 32767].

    One instance belongs to one generation run. Instances are not
    thread-safe and must not be shared between concurrent runs.
    """

    __slots__ = ("_state", "call_count")

    def __init__(self, seed: int = 0):
        self._state = DEFAULT_SEED
        self.call_count = 0
        self.seed(seed)

    @property
    def state(self) -> int:
        return self._state

    def seed(self, value: int) -> None:
        """Reset the state. Zero selects DEFAULT_SEED."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidParameterError("seed", value, "must be an integer")
        if not 0 <= value <= _MASK32:
            raise InvalidParameterError("seed", value, "must fit in 32 unsigned bits")
        self._state = value if value else DEFAULT_SEED
        self.call_count = 0

    def next(self) -> int:
        """Advance the state and return bits 8..22 of the new word."""
        self.call_count += 1
        self._state = _uint32(self._state * MULTIPLIER)
        return (self._state >> 8) & 0x7FFF
