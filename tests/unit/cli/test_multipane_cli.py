"""CLI argument and output tests for ``multipane.cli.main``."""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from multipane import cli
from multipane.config import load_sort_preferences


class CliRenderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        patcher = mock.patch("multipane.config.CONFIG_PATH", self.root / "config" / "config.json")
        patcher.start()
        self.addCleanup(patcher.stop)

        self.left = self.root / "left"
        self.right = self.root / "right"
        for directory, size in ((self.left, 3), (self.right, 9)):
            directory.mkdir()
            (directory / "common.txt").write_text("x" * size, encoding="utf-8")
        (self.left / "only-left.txt").write_text("", encoding="utf-8")

    def _run(self, *argv: str) -> str:
        stdout = io.StringIO()
        with mock.patch("sys.stdout", stdout):
            cli.main(list(argv))
        return stdout.getvalue()

    def test_renders_each_path_into_a_pane(self) -> None:
        output = self._run(
            "--width", "60", "--height", "6", "--layout", "one-row", "--compare", "size",
            str(self.left), str(self.right),
        )

        lines = output.splitlines()
        self.assertEqual(len(lines), 6)
        self.assertIn("common.txt", lines[1])
        self.assertIn("only-left.txt", output)
        self.assertIn("compare: size", lines[-1])
        self.assertNotIn("\033[", output)

    def test_sort_flags_are_applied(self) -> None:
        output = self._run("--width", "200", "--height", "4", "--sort", "size", "--desc", str(self.left))

        lines = output.splitlines()
        self.assertIn("Size ↓", lines[0])
        self.assertIn("common.txt", lines[1])

    def test_filter_applies_to_every_pane(self) -> None:
        output = self._run("--width", "120", "--height", "5", "--filter", "only", str(self.left), str(self.right))

        self.assertIn("only-left.txt", output)
        self.assertNotIn("common.txt", output)
        self.assertIn("/only", output.splitlines()[0])

    def test_run_writes_visited_directories_to_history(self) -> None:
        self._run("--width", "60", "--height", "4", str(self.left))

        config = json.loads((self.root / "config" / "config.json").read_text(encoding="utf-8"))
        left = str(self.left.resolve())
        self.assertEqual(config["history"]["recent"]["0"][0]["path"], left)
        self.assertEqual(config["history"]["visits"]["0"][left]["filename"], "common.txt")

    def test_save_sort_persists_sort_options(self) -> None:
        self._run("--width", "200", "--height", "4", "--sort", "size", "--desc", "--save-sort", str(self.left))

        spec = load_sort_preferences()
        self.assertEqual((spec.criterion, spec.direction), ("size", "desc"))
        output = self._run("--width", "200", "--height", "4", str(self.left))
        self.assertIn("Size ↓", output.splitlines()[0])

    def test_sort_flags_are_not_persisted_by_default(self) -> None:
        self._run("--width", "200", "--height", "4", "--sort", "size", str(self.left))

        self.assertEqual(load_sort_preferences().criterion, "name")

    def test_keys_prints_help_sections(self) -> None:
        output = self._run("--keys")

        self.assertTrue(output.startswith("Navigation"))
        self.assertIn("Pane Management", output)

    def test_missing_path_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run(str(self.root / "nope"))
        self.assertIn("Path not found", str(ctx.exception))

    def test_file_path_is_rejected(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run(str(self.left / "common.txt"))
        self.assertIn("Not a directory", str(ctx.exception))

    def test_unknown_layout_exits(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run("--layout", "grid", str(self.left))
        self.assertIn("grid", str(ctx.exception))

    def test_too_many_paths_exits(self) -> None:
        with self.assertRaises(SystemExit):
            self._run(*[str(self.left)] * 5)


if __name__ == "__main__":
    unittest.main()
