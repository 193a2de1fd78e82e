"""
Core terrain generation functionality.
"""

from .errors import InvalidParameterError
from .walk_prng import WalkPRNG, DEFAULT_SEED
from .heightfield import HeightField, HeightFieldStats, WIDTH, HEIGHT
from .level_parameters import LevelParameters
from .exemption import CellExemption, NeverExempt, MaskExemption
from .heightmap_generator import (
    RandomWalkGenerator,
    WalkStep,
    apply_sea_level_clamp,
    apply_smoothing_pass,
    smooth,
    generate,
    generate_many,
)

__all__ = ['InvalidParameterError', 'WalkPRNG', 'DEFAULT_SEED',
           'HeightField', 'HeightFieldStats', 'WIDTH', 'HEIGHT', 'LevelParameters',
           'CellExemption', 'NeverExempt', 'MaskExemption',
           'RandomWalkGenerator', 'WalkStep', 'apply_sea_level_clamp',
           'apply_smoothing_pass', 'smooth', 'generate', 'generate_many']
