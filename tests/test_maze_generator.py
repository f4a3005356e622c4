import json
import tempfile
import unittest
from pathlib import Path

from PIL import Image

from holes.maze import MazeEvaluator, MazeGenerator
from holes.maze.render import TRACK_GLYPH


class MazeGeneratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.output_dir = Path(self.tmp.name) / "maze"

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_create_puzzle_writes_text_assets(self) -> None:
        generator = MazeGenerator(output_dir=self.output_dir, width=6, height=4, seed=7)
        record = generator.create_puzzle(puzzle_id="maze-test")

        self.assertEqual(record.input_path, "puzzles/maze-test_input.txt")
        self.assertEqual(record.output_path, "solutions/maze-test_output.txt")
        self.assertIsNone(record.input_image_path)
        unsolved = (self.output_dir / record.input_path).read_text(encoding="utf-8")
        solved = (self.output_dir / record.output_path).read_text(encoding="utf-8")
        self.assertEqual(len(unsolved.splitlines()), 9)
        self.assertNotIn(TRACK_GLYPH, unsolved)
        self.assertIn(TRACK_GLYPH, solved)
        self.assertEqual(record.grid_size, (4, 6))
        self.assertEqual(len(record.passages), 4)
        self.assertEqual(record.to_dict()["exit"], list(record.exit))

    def test_same_seed_reproduces_maze(self) -> None:
        first = MazeGenerator(output_dir=self.output_dir / "a", width=8, height=8, seed=99)
        second = MazeGenerator(output_dir=self.output_dir / "b", width=8, height=8, seed=99)
        one = first.create_puzzle(puzzle_id="same")
        two = second.create_puzzle(puzzle_id="same")
        self.assertEqual(one.to_dict()["passages"], two.to_dict()["passages"])
        self.assertEqual(
            (first.output_dir / one.output_path).read_text(encoding="utf-8"),
            (second.output_dir / two.output_path).read_text(encoding="utf-8"),
        )

    def test_images_are_rendered_on_request(self) -> None:
        generator = MazeGenerator(output_dir=self.output_dir, width=5, height=3, seed=1, render_images=True, cell_size=4)
        record = generator.create_puzzle(puzzle_id="with-images")
        with Image.open(self.output_dir / record.output_image_path) as image:
            self.assertEqual(image.size, (11 * 4, 7 * 4))
        self.assertTrue((self.output_dir / record.input_image_path).exists())

    def test_generate_dataset_appends_metadata(self) -> None:
        generator = MazeGenerator(output_dir=self.output_dir, width=4, height=4, seed=3)
        metadata_path = self.output_dir / "puzzles.json"
        generator.generate_dataset(2, metadata_path=metadata_path)
        generator.generate_dataset(3, metadata_path=metadata_path)
        payload = json.loads(metadata_path.read_text(encoding="utf-8"))
        self.assertEqual(len(payload), 5)
        self.assertEqual(len({item["id"] for item in payload}), 5)

    def test_invalid_dimensions_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            MazeGenerator(output_dir=self.output_dir, width=0, height=5)


class MazeEvaluatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.output_dir = Path(self.tmp.name) / "maze"
        self.generator = MazeGenerator(output_dir=self.output_dir, width=7, height=5, seed=123)
        self.record = self.generator.create_puzzle(puzzle_id="maze-judge")

        metadata_path = self.output_dir / "puzzles.json"
        metadata_path.write_text(json.dumps([self.record.to_dict()]), encoding="utf-8")
        self.evaluator = MazeEvaluator(metadata_path)
        self.solved = (self.output_dir / self.record.output_path).read_text(encoding="utf-8")
        self.unsolved = (self.output_dir / self.record.input_path).read_text(encoding="utf-8")

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_expected_output_file_is_exact_match(self) -> None:
        result = self.evaluator.evaluate(self.record.id, self.output_dir / self.record.output_path)
        self.assertTrue(result.exact_match)
        self.assertTrue(result.connected)
        self.assertFalse(result.stray_in_walls)
        self.assertEqual(result.mismatched_rows, [])

    def test_missing_trailing_newline_still_matches(self) -> None:
        result = self.evaluator.evaluate(self.record.id, self.solved.rstrip("\n"))
        self.assertTrue(result.exact_match)

    def test_crlf_line_endings_name_the_differing_rows(self) -> None:
        result = self.evaluator.evaluate(self.record.id, self.solved.replace("\n", "\r\n"))
        self.assertFalse(result.exact_match)
        self.assertEqual(result.mismatched_rows, list(range(11)))
        self.assertNotIn("on 0 rows", result.message)

    def test_extra_blank_line_is_a_mismatch(self) -> None:
        result = self.evaluator.evaluate(self.record.id, self.solved + "\n")
        self.assertFalse(result.exact_match)
        self.assertEqual(result.mismatched_rows, [11])

    def test_single_cell_hole_is_connected(self) -> None:
        generator = MazeGenerator(output_dir=self.output_dir / "tiny", width=1, height=1, seed=0)
        record = generator.create_puzzle(puzzle_id="tiny")
        metadata_path = generator.output_dir / "puzzles.json"
        metadata_path.write_text(json.dumps([record.to_dict()]), encoding="utf-8")
        result = MazeEvaluator(metadata_path).evaluate("tiny", generator.output_dir / record.output_path)
        self.assertTrue(result.exact_match)
        self.assertTrue(result.connected)

    def test_unsolved_input_is_not_a_solution(self) -> None:
        result = self.evaluator.evaluate(self.record.id, self.unsolved)
        self.assertFalse(result.exact_match)
        self.assertFalse(result.connected)
        self.assertTrue(result.mismatched_rows)
        self.assertEqual(result.message, "Track is not continuous from start to exit.")

    def test_track_in_wall_is_reported(self) -> None:
        candidate = TRACK_GLYPH + self.solved[1:]
        result = self.evaluator.evaluate(self.record.id, candidate)
        self.assertFalse(result.exact_match)
        self.assertTrue(result.stray_in_walls)
        self.assertEqual(result.mismatched_rows, [0])
        self.assertEqual(result.message, "Track marks overlap walls.")

    def test_missing_markers_are_reported(self) -> None:
        result = self.evaluator.evaluate(self.record.id, self.solved.replace("S", " "))
        self.assertFalse(result.connected)
        self.assertEqual(result.message, "Submission is missing the start or exit marker.")

    def test_unknown_puzzle_id(self) -> None:
        with self.assertRaises(KeyError):
            self.evaluator.evaluate("missing", self.solved)

    def test_missing_candidate_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            self.evaluator.evaluate(self.record.id, Path(self.tmp.name) / "nope.txt")


if __name__ == "__main__":
    unittest.main()
