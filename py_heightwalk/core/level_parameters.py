"""Per-level generation parameters supplied by the level-data loader."""

from dataclasses import dataclass, fields
from typing import Any, Mapping

from .errors import InvalidParameterError

MAX_WALK_LENGTH = 0x7FFF  # signed 16-bit counter

# Loader records use the game's camelCase names
_ALIASES = {
    "walkLength": "walk_length",
    "terrainRaise": "terrain_raise",
    "startX": "start_x",
    "startY": "start_y",
    "smoothingPasses": "smoothing_passes",
}


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(name, value, "must be an integer")


@dataclass(frozen=True)
class LevelParameters:
    """Configuration for generating one level's terrain."""

    seed: int
    walk_length: int
    terrain_raise: int
    start_x: int
    start_y: int
    smoothing_passes: int

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "LevelParameters":
        """
        Build parameters from a loader record.

        Args:
            record: Mapping keyed by field name, snake_case or camelCase

        Returns:
            Validated LevelParameters
        """
        values = {}
        for key, value in record.items():
            values[_ALIASES.get(key, key)] = value

        kwargs = {}
        for f in fields(cls):
            if f.name not in values:
                raise InvalidParameterError(f.name, None, "missing from level record")
            kwargs[f.name] = values[f.name]

        params = cls(**kwargs)
        params.validate()
        return params

    def validate(self) -> None:
        """Raise InvalidParameterError for values the generator cannot honour."""
        for f in fields(self):
            _require_int(f.name, getattr(self, f.name))

        if not 0 <= self.seed <= 0xFFFFFFFF:
            raise InvalidParameterError("seed", self.seed, "must fit in 32 unsigned bits")
        if self.walk_length < 0:
            # The step counter stops at -1; a negative start never reaches it
            raise InvalidParameterError("walk_length", self.walk_length, "must not be negative")
        if self.walk_length > MAX_WALK_LENGTH:
            raise InvalidParameterError(
                "walk_length", self.walk_length, f"must not exceed {MAX_WALK_LENGTH:#x}"
            )
        if not 0 <= self.terrain_raise <= 0xFF:
            raise InvalidParameterError("terrain_raise", self.terrain_raise, "must fit in 8 unsigned bits")
        if self.smoothing_passes < 0:
            raise InvalidParameterError("smoothing_passes", self.smoothing_passes, "must not be negative")
