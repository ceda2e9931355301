import tempfile
import unittest
from pathlib import Path

from rubik_nxn.animation import FixedTicker
from rubik_nxn.config import CubeConfig, config_from_dict, load_config
from rubik_nxn.engine import RubikCube


class TestConfig(unittest.TestCase):
    def _write(self, text: str) -> Path:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        path = Path(tmp.name) / "cube.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_empty_file_gives_defaults(self):
        config = load_config(self._write(""))
        self.assertEqual(config, CubeConfig())
        self.assertEqual(config.dimensions, 3)
        self.assertEqual(config.history_size, 50)
        self.assertEqual(config.shuffle_count, 20)

    def test_values_are_read_from_yaml(self):
        config = load_config(self._write("dimensions: 5\nhistory_size: 0\nshuffle_speed: 8.5\nseed: 4\n"))
        self.assertEqual(config.dimensions, 5)
        self.assertEqual(config.history_size, 0)
        self.assertEqual(config.shuffle_speed, 8.5)
        self.assertEqual(config.seed, 4)

    def test_unknown_keys_are_rejected(self):
        with self.assertRaises(ValueError):
            load_config(self._write("dimensions: 3\ncolour: red\n"))

    def test_non_mapping_is_rejected(self):
        with self.assertRaises(ValueError):
            load_config(self._write("- 1\n- 2\n"))

    def test_validation(self):
        with self.assertRaises(ValueError):
            config_from_dict({"dimensions": 10})
        with self.assertRaises(ValueError):
            config_from_dict({"dimensions": 1})
        with self.assertRaises(ValueError):
            config_from_dict({"rotation_speed": 0})
        with self.assertRaises(ValueError):
            config_from_dict({"history_size": -2})
        with self.assertRaises(ValueError):
            config_from_dict({"min_dimensions": 4, "max_dimensions": 3, "dimensions": 4})

    def test_merged_ignores_none(self):
        config = CubeConfig().merged(dimensions=4, seed=None, rotation_speed=None)
        self.assertEqual(config.dimensions, 4)
        self.assertIsNone(config.seed)
        self.assertEqual(config.rotation_speed, 1.0)

    def test_cube_from_config(self):
        config = CubeConfig(dimensions=4, history_size=3, rotation_speed=2.0, hide_interior_faces=False)
        cube = RubikCube.from_config(config, ticker=FixedTicker())
        self.assertEqual(cube.dimensions, 4)
        self.assertEqual(cube.history.capacity, 3)
        self.assertEqual(cube.rotation_speed, 2.0)
        self.assertEqual(cube.piece_at((0, 0, 0)).faces_visible, [True] * 6)


if __name__ == "__main__":
    unittest.main()
