#!/usr/bin/env python3
"""Debug script to trace PRNG draws and walk steps for one level."""

import argparse
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent))

from py_heightwalk.core import (
    HeightField,
    LevelParameters,
    RandomWalkGenerator,
    WalkPRNG,
    apply_sea_level_clamp,
    generate,
)
from py_heightwalk.utils.log_setup import configure_logging


def trace_prng(seed, count):
    """Print the first ``count`` PRNG outputs for ``seed``."""
    prng = WalkPRNG(seed)
    print(f"\nPRNG outputs for seed {seed:#x}")
    print("=" * 60)
    for i in range(count):
        value = prng.next()
        print(f"  {i:3d}: {value:5d}  state={prng.state:#010x}")


def trace_walk(params, count):
    """Print the first ``count`` deposit steps of the walk."""
    field = HeightField()
    prng = WalkPRNG(params.seed)
    walker = RandomWalkGenerator(field, prng, params)

    print(f"\nWalk from ({params.start_x}, {params.start_y}), {params.walk_length + 1} deposits")
    print("=" * 60)
    for n, step in enumerate(walker.steps()):
        if n < count:
            print(f"  step {n:4d}: x={step.x:2d} y={step.y:3d} cell={field.cells[step.index]}")

    print(f"\nPRNG calls for walk: {prng.call_count}")
    print(f"Final cursor: ({walker.x}, {walker.y})")
    print(f"Cells clamped at sea level: {apply_sea_level_clamp(field)}")


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=lambda s: int(s, 0), default=0x1E19)
    parser.add_argument("--walk-length", type=lambda s: int(s, 0), default=0x0750)
    parser.add_argument("--raise", dest="terrain_raise", type=int, default=8)
    parser.add_argument("--start", type=int, nargs=2, default=(35, 49))
    parser.add_argument("--passes", type=int, default=4)
    parser.add_argument("--steps", type=int, default=20, help="Walk steps to print")
    args = parser.parse_args()

    configure_logging(fmt="plain")

    params = LevelParameters(
        seed=args.seed,
        walk_length=args.walk_length,
        terrain_raise=args.terrain_raise,
        start_x=args.start[0],
        start_y=args.start[1],
        smoothing_passes=args.passes,
    )
    params.validate()

    trace_prng(params.seed, 10)
    trace_walk(params, args.steps)

    stats = generate(params).stats()
    print(f"\nFinal heightfield: min={stats.min} max={stats.max} "
          f"mean={stats.mean:.3f} nonzero={stats.nonzero}")


if __name__ == "__main__":
    main()
