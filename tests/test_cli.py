import io
import json
import unittest
from contextlib import redirect_stderr, redirect_stdout

from rubik_nxn.cli import build_parser, main
from rubik_nxn.engine import RubikCube
from rubik_nxn.geometry import Axis
from rubik_nxn.history import Move
from rubik_nxn.state_codec import InvalidArgument, format_move, parse_move


def run_cli(argv: list[str]) -> tuple[int, list[dict], str]:
    out = io.StringIO()
    err = io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    lines = [json.loads(line) for line in out.getvalue().splitlines() if line.strip()]
    return code, lines, err.getvalue()


class TestNotation(unittest.TestCase):
    def test_parse_and_format(self):
        move = parse_move("y2-")
        self.assertEqual(move, Move(axis=Axis.Y, layer=2, positive=False))
        self.assertEqual(format_move(move), "Y2-")

    def test_invalid_notation(self):
        for token in ("Q0+", "X+", "X0", "X-1+", ""):
            with self.assertRaises(InvalidArgument):
                parse_move(token)
        with self.assertRaises(InvalidArgument):
            parse_move("X3+", border=2)


class TestCLI(unittest.TestCase):
    def test_parser_modes(self):
        parser = build_parser()
        args = parser.parse_args(["shuffle", "--count", "5", "--dimensions", "4"])
        self.assertEqual(args.mode, "shuffle")
        self.assertEqual(args.count, 5)
        args = parser.parse_args(["play", "X0+", "undo"])
        self.assertEqual(args.moves, ["X0+", "undo"])

    def test_shuffle_prints_moves(self):
        code, lines, _ = run_cli(["shuffle", "--count", "6", "--seed", "3", "--speed", "100"])
        self.assertEqual(code, 0)
        result = lines[-1]
        self.assertEqual(len(result["moves"]), 6)
        self.assertEqual(result["dimensions"], 3)

    def test_play_move_then_undo_is_solved(self):
        code, lines, _ = run_cli(["play", "--speed", "100", "X0+", "undo"])
        self.assertEqual(code, 0)
        self.assertEqual(lines[0], {"move": "X0+", "solved": False})
        # the solved event fires from inside the undo animation
        self.assertEqual(lines[1], {"event": "solved"})
        self.assertEqual(lines[2], {"undo": "X0+"})
        self.assertTrue(lines[-1]["solved"])
        self.assertEqual(lines[-1]["history"], [])

    def test_play_rejects_bad_move(self):
        code, _, err = run_cli(["play", "--dimensions", "2", "X5+"])
        self.assertEqual(code, 1)
        self.assertIn("Layer", err)

    def test_state_payload_lists_pieces(self):
        cube = RubikCube()
        cube.initialize(2)
        payload = cube.state_payload()
        self.assertEqual(len(payload["pieces"]), 8)
        self.assertTrue(payload["solved"])
        self.assertFalse(payload["rotating"])


if __name__ == "__main__":
    unittest.main()
