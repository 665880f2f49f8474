"""Tests for the command-line front door.

Covers status printing, the clean-tree refusal, repository errors, config
overrides, and printing the composed message after the session.
"""

from __future__ import annotations

import io
import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from committer import cli
from committer.config import RuntimeSettings
from committer.errors import RepositoryAccessError, TerminalSetupError


class _TtyStdin:
    def isatty(self) -> bool:
        return True


@unittest.skipIf(shutil.which("git") is None, "git is required for CLI tests")
class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        for args in (
            ("init", "-q"),
            ("config", "user.email", "tests@example.com"),
            ("config", "user.name", "Tests"),
            ("config", "commit.gpgsign", "false"),
        ):
            subprocess.run(["git", *args], cwd=self.root, check=True, capture_output=True)
        (self.root / "a.txt").write_text("one\n", encoding="utf-8")
        subprocess.run(["git", "add", "-A"], cwd=self.root, check=True, capture_output=True)
        subprocess.run(["git", "commit", "-q", "-m", "initial"], cwd=self.root, check=True, capture_output=True)

        patcher = mock.patch("committer.cli.load_settings", return_value=RuntimeSettings())
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _main(self, argv: list[str], stdin=None) -> str:
        stdout = io.StringIO()
        with mock.patch("sys.stdout", stdout), mock.patch("sys.stdin", stdin or _TtyStdin()):
            cli.main(argv)
        return stdout.getvalue()

    def test_status_flag_prints_plain_listing(self) -> None:
        (self.root / "a.txt").write_text("two\n", encoding="utf-8")
        output = self._main(["--status", "--no-color", str(self.root)])
        self.assertEqual(output, " [ ] M a.txt\n")

    def test_status_flag_on_clean_tree(self) -> None:
        output = self._main(["--status", "--no-color", str(self.root)])
        self.assertEqual(output, " Working directory clean\n")

    def test_non_tty_stdin_prints_status_instead_of_ui(self) -> None:
        (self.root / "b.txt").write_text("new\n", encoding="utf-8")
        with mock.patch("committer.cli.run_ui") as run_ui:
            output = self._main(["--no-color", str(self.root)], stdin=io.StringIO())
        run_ui.assert_not_called()
        self.assertEqual(output, " [ ] A b.txt\n")

    def test_clean_tree_refuses_to_open_ui(self) -> None:
        with mock.patch("committer.cli.run_ui") as run_ui:
            output = self._main([str(self.root)])
        run_ui.assert_not_called()
        self.assertEqual(output, "Working directory is clean. Nothing to commit.\n")

    def test_message_is_printed_after_session(self) -> None:
        (self.root / "a.txt").write_text("two\n", encoding="utf-8")
        with mock.patch("committer.cli.run_ui", return_value="feat: change\n\nbody") as run_ui:
            output = self._main(["--diff-tool", "my-difft", "--theme", "ocean", str(self.root)])

        self.assertEqual(output, "feat: change\n\nbody\n")
        settings = run_ui.call_args.args[2]
        self.assertEqual(settings.diff_tool, "my-difft")
        self.assertEqual(run_ui.call_args.kwargs["theme"].name, "ocean")

    def test_empty_message_prints_nothing(self) -> None:
        (self.root / "a.txt").write_text("two\n", encoding="utf-8")
        with mock.patch("committer.cli.run_ui", return_value=""):
            self.assertEqual(self._main([str(self.root)]), "")

    def test_terminal_setup_error_exits(self) -> None:
        (self.root / "a.txt").write_text("two\n", encoding="utf-8")
        with mock.patch("committer.cli.run_ui", side_effect=TerminalSetupError("no tty")):
            with self.assertRaises(SystemExit) as ctx:
                self._main([str(self.root)])
        self.assertEqual(str(ctx.exception), "no tty")

    def test_missing_path_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._main([str(self.root / "missing")])
        self.assertIn("Path not found", str(ctx.exception))

    def test_log_file_option_writes_records(self) -> None:
        log_path = self.root.parent / f"{self.root.name}.log"
        self.addCleanup(lambda: log_path.unlink(missing_ok=True))

        self._main(["--status", "--log-file", str(log_path), "--verbose", str(self.root)])

        self.assertIn("opened repository", log_path.read_text(encoding="utf-8"))


class CliRepositoryErrorTests(unittest.TestCase):
    def test_repository_error_becomes_system_exit(self) -> None:
        with mock.patch("committer.cli.load_settings", return_value=RuntimeSettings()), mock.patch(
            "committer.cli.Repository.discover", side_effect=RepositoryAccessError("Not in a git repository")
        ):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["/somewhere"])
        self.assertEqual(str(ctx.exception), "Not in a git repository")


if __name__ == "__main__":
    unittest.main()
