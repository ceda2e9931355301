import unittest

import numpy as np

from rubik_nxn.animation import FixedTicker
from rubik_nxn.engine import CubeEvent, RubikCube
from rubik_nxn.pieces import Cublet
from rubik_nxn.shuffle import generate_shuffle
from rubik_nxn.state_codec import InvalidArgument


def make_cube(dimensions: int = 3, seed: int | None = None) -> RubikCube:
    cube = RubikCube(ticker=FixedTicker(dt=1.0), seed=seed)
    cube.initialize(dimensions, Cublet, 10)
    return cube


class TestShuffleGenerator(unittest.TestCase):
    def test_consecutive_moves_never_share_an_axis(self):
        moves = list(generate_shuffle(500, 4, np.random.default_rng(99)))
        self.assertEqual(len(moves), 500)
        for prev, nxt in zip(moves[:-1], moves[1:]):
            self.assertNotEqual(prev.axis, nxt.axis)

    def test_layers_and_directions_cover_the_range(self):
        moves = list(generate_shuffle(400, 5, np.random.default_rng(1)))
        self.assertEqual({m.layer for m in moves}, set(range(5)))
        self.assertEqual({m.positive for m in moves}, {True, False})
        self.assertEqual(len({m.axis for m in moves}), 3)

    def test_is_deterministic_for_fixed_seed(self):
        a = list(generate_shuffle(30, 3, np.random.default_rng(123)))
        b = list(generate_shuffle(30, 3, np.random.default_rng(123)))
        self.assertEqual(a, b)

    def test_zero_count_yields_nothing(self):
        self.assertEqual(list(generate_shuffle(0, 3, np.random.default_rng(0))), [])


class TestCubeShuffle(unittest.IsolatedAsyncioTestCase):
    async def test_shuffle_runs_every_step_unrecorded(self):
        cube = make_cube(3)
        changed = []
        cube.add_listener(CubeEvent.CHANGED, lambda c: changed.append(c.is_rotating))

        moves = await cube.shuffle(15, seed=5)
        self.assertEqual(len(moves), 15)
        self.assertEqual(changed, [False] * 15)
        self.assertEqual(len(cube.history), 0)
        self.assertFalse(cube.is_rotating)
        for prev, nxt in zip(moves[:-1], moves[1:]):
            self.assertNotEqual(prev.axis, nxt.axis)

    async def test_same_seed_gives_same_state(self):
        a = make_cube(4)
        b = make_cube(4)
        moves_a = await a.shuffle(20, seed=42)
        moves_b = await b.shuffle(20, seed=42)
        self.assertEqual(moves_a, moves_b)
        self.assertEqual(a.snapshot(), b.snapshot())

    async def test_cube_seed_drives_unseeded_shuffles(self):
        a = make_cube(3, seed=8)
        b = make_cube(3, seed=8)
        self.assertEqual(await a.shuffle(10), await b.shuffle(10))

    async def test_replaying_inverse_moves_solves_the_cube(self):
        cube = make_cube(3)
        moves = await cube.shuffle(25, seed=11)
        for move in reversed(moves):
            inverse = move.inverse()
            await cube.rotate(inverse.axis, inverse.layer, inverse.positive, record=False)
        self.assertTrue(cube.is_solved())

    async def test_start_shuffle_and_invalid_count(self):
        cube = make_cube(3)
        with self.assertRaises(InvalidArgument):
            await cube.shuffle(-1)
        with self.assertRaises(InvalidArgument):
            cube.start_shuffle(-3)

        task = cube.start_shuffle(4, speed=2.0, seed=0)
        self.assertIsNotNone(task)
        moves = await task
        self.assertEqual(len(moves), 4)

    async def test_undo_after_shuffle_only_reverts_recorded_moves(self):
        cube = make_cube(3)
        await cube.shuffle(6, seed=2)
        shuffled = cube.snapshot()
        await cube.rotate("x", 1, True)
        await cube.undo()
        self.assertEqual(shuffled, cube.snapshot())
        self.assertIsNone(await cube.undo())


if __name__ == "__main__":
    unittest.main()
