"""
Heightmap generation module.

Reproduces the game's terrain construction bit for bit:

1. A seeded random walk deposits ``terrain_raise`` on every visited cell.
2. The sea-level clamp zeroes cells whose byte reads as negative.
3. A box blur runs ``smoothing_passes`` times in place.

All arithmetic wraps at the documented widths (8-bit cells, 32-bit PRNG
state) and coordinates wrap by bitmask, so no step can fail once the
parameters are validated.
"""

import concurrent.futures
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np
import structlog

from ..config import settings
from .errors import InvalidParameterError
from .exemption import CellExemption, NEVER_EXEMPT
from .heightfield import HeightField
from .level_parameters import LevelParameters
from .walk_prng import WalkPRNG

logger = structlog.get_logger()


class WalkStep(NamedTuple):
    """Cell visited by one deposit step."""
    x: int
    y: int
    index: int


class RandomWalkGenerator:
    """
    Moves a cursor one random step at a time, raising each visited cell.

    The walk performs ``walk_length + 1`` deposits: the game counts down
    from walk_length and stops when the counter passes below zero.
    """

    def __init__(self, field: HeightField, prng: WalkPRNG, params: LevelParameters,
                 exemption: Optional[CellExemption] = None):
        """
        Initialize the walk.

        Args:
            field: Heightfield mutated in place
            prng: Seeded PRNG, advanced by exactly two draws per step
            params: Level parameters (walk length, raise amount, start)
            exemption: Optional per-cell deposit exemption
        """
        self.field = field
        self.prng = prng
        self.params = params
        self.exemption = exemption or NEVER_EXEMPT
        self.x = params.start_x
        self.y = params.start_y

    def steps(self) -> Iterator[WalkStep]:
        """Perform the walk lazily, yielding each deposit location."""
        cells = self.field.cells
        width = self.field.width
        x_mask = self.field.x_mask
        y_mask = self.field.y_mask
        raise_by = self.params.terrain_raise

        counter = self.params.walk_length
        while True:
            # Draw order is x then y; swapping them changes the whole level
            dx = self.prng.next() % 3 - 1
            dy = self.prng.next() % 3 - 1
            self.x = (self.x + dx) & x_mask
            self.y = (self.y + dy) & y_mask

            index = self.y * width + self.x
            if not self.exemption.exempt_from_deposit(index):
                cells[index] = (int(cells[index]) + raise_by) & 0xFF

            yield WalkStep(self.x, self.y, index)

            counter -= 1
            if counter == -1:
                break

    def run(self) -> Tuple[int, int]:
        """Perform the whole walk and return the final cursor position."""
        for _ in self.steps():
            pass
        return self.x, self.y


def apply_sea_level_clamp(field: HeightField) -> int:
    """
    Zero every cell whose byte is negative when read as signed 8-bit.

    Returns:
        Number of cells that were clamped
    """
    below = field.cells >= 0x80
    clamped = int(np.count_nonzero(below))
    field.cells[below] = 0
    return clamped


def apply_smoothing_pass(field: HeightField, exemption: Optional[CellExemption] = None) -> None:
    """
    Run one in-place box blur over the interior cells.

    Visits x = 1..width-2 in the outer loop and y = 1..height-2 in the inner
    loop, writing each result back immediately. The up and left neighbours
    have therefore already been smoothed in this pass while the right and
    down neighbours have not. The border ring is never written.

    A uniform field is a fixed point, but in general a second pass changes
    the result again.
    """
    exemption = exemption or NEVER_EXEMPT
    width = field.width
    # Python ints keep the neighbour sum exact; cells never exceed 255
    cells = field.cells.tolist()

    for x in range(1, width - 1):
        for y in range(1, field.height - 1):
            i = y * width + x
            if exemption.exempt_from_smoothing(i):
                continue
            neighbor_sum = cells[i - width] + cells[i - 1] + cells[i + 1] + cells[i + width]
            cells[i] = ((neighbor_sum // 4) + cells[i]) // 2

    field.cells[:] = cells


def smooth(field: HeightField, passes: int, exemption: Optional[CellExemption] = None) -> None:
    """Apply the smoothing pass ``passes`` times."""
    if passes < 0:
        raise InvalidParameterError("smoothing_passes", passes, "must not be negative")
    for n in range(passes):
        apply_smoothing_pass(field, exemption)
        logger.debug("Smoothing pass complete", smoothing_pass=n + 1)


def generate(params: LevelParameters, exemption: Optional[CellExemption] = None) -> HeightField:
    """
    Generate one level's heightfield.

    Args:
        params: Level parameters from the level-data loader
        exemption: Optional overlay exemption, defaults to never exempt

    Returns:
        Finished heightfield, owned by the caller

    Raises:
        InvalidParameterError: If the parameters fail validation
    """
    try:
        params.validate()
    except InvalidParameterError as e:
        logger.warning("Rejected level parameters", field=e.field, value=e.value, reason=e.reason)
        raise

    field = HeightField()
    prng = WalkPRNG(params.seed)

    walker = RandomWalkGenerator(field, prng, params, exemption)
    end_x, end_y = walker.run()
    logger.debug(
        "Random walk complete",
        deposits=params.walk_length + 1,
        prng_calls=prng.call_count,
        end_x=end_x,
        end_y=end_y,
    )

    clamped = apply_sea_level_clamp(field)
    logger.debug("Sea-level clamp applied", clamped_cells=clamped)

    smooth(field, params.smoothing_passes, exemption)

    stats = field.stats()
    logger.info(
        "Generated heightfield",
        seed=params.seed,
        walk_length=params.walk_length,
        smoothing_passes=params.smoothing_passes,
        max_height=stats.max,
        mean_height=round(stats.mean, 3),
        nonzero_cells=stats.nonzero,
    )
    return field


def generate_many(levels: Iterable[LevelParameters],
                  max_workers: Optional[int] = None) -> List[HeightField]:
    """
    Generate several independent levels concurrently.

    Each level gets its own PRNG and heightfield, so workers share no
    mutable state. Results come back in input order.

    Args:
        levels: Parameters for each level
        max_workers: Thread count, defaults to settings.max_workers

    Returns:
        Heightfields in the same order as ``levels``
    """
    levels = list(levels)
    for params in levels:
        params.validate()

    workers = max_workers or settings.max_workers
    logger.info("Generating levels", count=len(levels), max_workers=workers)

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(generate, levels))
