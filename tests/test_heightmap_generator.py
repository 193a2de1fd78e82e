"""
Tests for the random walk, sea-level clamp and smoothing passes.
"""

import pytest
import numpy as np
from py_heightwalk.core.heightfield import HeightField, WIDTH, HEIGHT
from py_heightwalk.core.level_parameters import LevelParameters
from py_heightwalk.core.walk_prng import WalkPRNG, DEFAULT_SEED
from py_heightwalk.core.exemption import MaskExemption
from py_heightwalk.core.errors import InvalidParameterError
from py_heightwalk.core.heightmap_generator import (
    RandomWalkGenerator,
    apply_sea_level_clamp,
    apply_smoothing_pass,
    smooth,
    generate,
    generate_many,
)


def make_params(**overrides):
    values = dict(seed=0x1E19, walk_length=0x0750, terrain_raise=8,
                  start_x=35, start_y=49, smoothing_passes=4)
    values.update(overrides)
    return LevelParameters(**values)


class TestRandomWalk:
    """Test the deposit walk."""

    @pytest.fixture
    def field(self):
        return HeightField()

    def test_first_step(self, field):
        """Seed 0x1E19 draws 20416 then 8079: dx=0, dy=-1."""
        walker = RandomWalkGenerator(field, WalkPRNG(0x1E19), make_params())
        step = next(walker.steps())
        assert (step.x, step.y) == (35, 48)
        assert step.index == 48 * WIDTH + 35
        assert field.get(35, 48) == 8

    def test_deposit_count_is_walk_length_plus_one(self, field):
        params = make_params(walk_length=100, terrain_raise=1)
        prng = WalkPRNG(params.seed)
        steps = list(RandomWalkGenerator(field, prng, params).steps())
        assert len(steps) == 101
        assert int(field.cells.sum()) == 101
        assert prng.call_count == 202

    def test_zero_walk_length_deposits_once(self, field):
        params = make_params(walk_length=0, terrain_raise=5)
        RandomWalkGenerator(field, WalkPRNG(params.seed), params).run()
        assert int(field.cells.sum()) == 5
        assert np.count_nonzero(field.cells) == 1

    def test_deposit_wraps_past_255(self, field):
        """A full cell wraps around instead of saturating."""
        field.cells[:] = 255
        # The first two draws from the default seed give dx=0, dy=0
        params = make_params(seed=DEFAULT_SEED, walk_length=0, terrain_raise=8,
                             start_x=10, start_y=20)
        RandomWalkGenerator(field, WalkPRNG(params.seed), params).run()
        assert field.get(10, 20) == (255 + 8) % 256 == 7
        assert np.count_nonzero(field.cells != 255) == 1

    @pytest.mark.parametrize("start", [(0, 0), (63, 127), (-40, 500)])
    def test_indices_stay_in_grid(self, field, start):
        params = make_params(seed=99, walk_length=0x7FFF, start_x=start[0], start_y=start[1])
        count = 0
        for step in RandomWalkGenerator(field, WalkPRNG(params.seed), params).steps():
            assert 0 <= step.index < WIDTH * HEIGHT
            assert 0 <= step.x < WIDTH
            assert 0 <= step.y < HEIGHT
            count += 1
        assert count == 0x8000

    def test_cursor_moves_at_most_one_cell(self, field):
        params = make_params(walk_length=500, start_x=30, start_y=60)
        prev = (30, 60)
        for step in RandomWalkGenerator(field, WalkPRNG(params.seed), params).steps():
            dx = (step.x - prev[0]) % WIDTH
            dy = (step.y - prev[1]) % HEIGHT
            assert dx in (0, 1, WIDTH - 1)
            assert dy in (0, 1, HEIGHT - 1)
            prev = (step.x, step.y)

    def test_exempt_cells_get_no_deposit(self, field):
        """Exemption skips the deposit but not the PRNG draws."""
        params = make_params(walk_length=300)
        plain_field = HeightField()
        plain_steps = list(RandomWalkGenerator(plain_field, WalkPRNG(params.seed), params).steps())

        exempt = MaskExemption(deposit_mask=np.ones(WIDTH * HEIGHT, dtype=bool))
        prng = WalkPRNG(params.seed)
        steps = list(RandomWalkGenerator(field, prng, params, exempt).steps())

        assert steps == plain_steps
        assert prng.call_count == 2 * 301
        assert np.all(field.cells == 0)

    def test_partial_deposit_mask(self, field):
        mask = np.zeros((HEIGHT, WIDTH), dtype=bool)
        mask[48, 35] = True
        params = make_params(walk_length=0)
        RandomWalkGenerator(field, WalkPRNG(params.seed), params, MaskExemption(deposit_mask=mask)).run()
        assert field.get(35, 48) == 0


class TestSeaLevelClamp:
    """Test the clamp of signed-negative bytes."""

    def test_clamp_negative_bytes(self):
        field = HeightField()
        field.cells[:] = np.arange(WIDTH * HEIGHT) % 256
        original = field.cells.copy()

        clamped = apply_sea_level_clamp(field)

        assert clamped == WIDTH * HEIGHT // 2
        assert np.all(field.cells.view(np.int8) >= 0)
        keep = original < 128
        assert np.array_equal(field.cells[keep], original[keep])
        assert np.all(field.cells[~keep] == 0)

    def test_boundary_values(self):
        field = HeightField(width=4, height=1)
        field.cells[:] = [127, 128, 255, 0]
        apply_sea_level_clamp(field)
        assert field.cells.tolist() == [127, 0, 0, 0]


class TestSmoothing:
    """Test the in-place box blur."""

    @pytest.fixture
    def spike(self):
        field = HeightField(width=8, height=8)
        field.set(2, 2, 100)
        return field

    def test_single_pass_values(self, spike):
        """Up and left neighbours are read after their own update."""
        apply_smoothing_pass(spike)
        nonzero = {
            (x, y): spike.get(x, y)
            for y in range(8) for x in range(8) if spike.get(x, y)
        }
        assert nonzero == {
            (2, 1): 12, (3, 1): 1,
            (1, 2): 12, (2, 2): 53, (3, 2): 6,
            (1, 3): 1, (2, 3): 6, (3, 3): 1,
        }

    def test_differs_from_double_buffered_blur(self, spike):
        """Reading all neighbours from a snapshot gives another answer."""
        m = spike.as_matrix().astype(int)
        buffered = m.copy()
        buffered[1:-1, 1:-1] = (
            (m[:-2, 1:-1] + m[2:, 1:-1] + m[1:-1, :-2] + m[1:-1, 2:]) // 4 + m[1:-1, 1:-1]
        ) // 2

        apply_smoothing_pass(spike)
        assert not np.array_equal(spike.as_matrix(), buffered)

    def test_border_untouched(self):
        rng = np.random.default_rng(1234)
        field = HeightField()
        field.cells[:] = rng.integers(0, 128, size=WIDTH * HEIGHT, dtype=np.uint8)
        before = field.as_matrix().copy()

        smooth(field, 3)

        after = field.as_matrix()
        assert np.array_equal(after[0, :], before[0, :])
        assert np.array_equal(after[-1, :], before[-1, :])
        assert np.array_equal(after[:, 0], before[:, 0])
        assert np.array_equal(after[:, -1], before[:, -1])
        assert not np.array_equal(after, before)

    def test_not_idempotent(self, spike):
        once = spike.copy()
        apply_smoothing_pass(once)
        twice = once.copy()
        apply_smoothing_pass(twice)
        assert once != twice

    def test_uniform_field_is_fixed_point(self):
        field = HeightField(width=16, height=16)
        field.cells[:] = 40
        smooth(field, 5)
        assert np.all(field.cells == 40)

    def test_zero_passes(self, spike):
        before = spike.copy()
        smooth(spike, 0)
        assert spike == before

    def test_negative_passes(self, spike):
        with pytest.raises(InvalidParameterError):
            smooth(spike, -1)

    def test_exempt_cell_keeps_value(self, spike):
        mask = np.zeros(64, dtype=bool)
        mask[spike.index(2, 2)] = True
        apply_smoothing_pass(spike, MaskExemption(smoothing_mask=mask))
        assert spike.get(2, 2) == 100
        # Neighbours still read the exempt cell
        assert spike.get(1, 2) == 12


class TestGenerate:
    """Test the full generation pipeline."""

    def test_deterministic(self):
        params = make_params()
        assert generate(params) == generate(params)

    def test_different_seeds_differ(self):
        assert generate(make_params(seed=1)) != generate(make_params(seed=2))

    def test_walk_only(self):
        """Without smoothing every deposit survives the clamp."""
        field = generate(make_params(smoothing_passes=0))
        stats = field.stats()
        assert int(field.cells.sum()) == (0x0750 + 1) * 8
        assert stats.max == 104

    def test_output_is_clamped(self):
        field = generate(make_params(terrain_raise=200, walk_length=2000, smoothing_passes=0))
        assert np.all(field.cells < 128)

    def test_invalid_parameters(self):
        with pytest.raises(InvalidParameterError):
            generate(make_params(walk_length=-1))
        with pytest.raises(InvalidParameterError):
            generate(make_params(smoothing_passes=-2))

    def test_generate_many_matches_sequential(self):
        levels = [make_params(seed=s) for s in (0x1E19, 7, 0, 123456)]
        results = generate_many(levels, max_workers=2)
        assert len(results) == 4
        for params, field in zip(levels, results):
            assert field == generate(params)

    def test_generate_many_validates_first(self):
        with pytest.raises(InvalidParameterError):
            generate_many([make_params(), make_params(walk_length=-5)])
