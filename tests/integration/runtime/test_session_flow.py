"""End-to-end session flows over real directories and processes.

Drives the reducer with key events, runs its effects through the real
``EffectRunner``, and feeds results back until the session settles.
"""

from __future__ import annotations

import tempfile
import time
import unittest
from pathlib import Path

from shellfm.controller import update
from shellfm.effects import Quit
from shellfm.events import KeyPressed
from shellfm.render import build_render_model
from shellfm.runtime.app import load_initial_state
from shellfm.runtime.effects import EffectRunner
from shellfm.state import Mode


def _settle(state, effects, runner: EffectRunner, timeout_seconds: float = 5.0):
    """Run ``effects`` and apply results until nothing is outstanding."""
    quits = []
    pending = list(effects)
    deadline = time.monotonic() + timeout_seconds
    while time.monotonic() < deadline:
        for effect in pending:
            if isinstance(effect, Quit):
                quits.append(effect)
            else:
                runner.submit(effect)
        pending = []
        # A result is queued before its worker leaves the outstanding count.
        idle = runner.outstanding == 0
        results = runner.drain_results()
        for result in results:
            state, emitted = update(state, result)
            pending.extend(emitted)
        if idle and not results and not pending and not state.loading:
            break
        time.sleep(0.01)
    return state, quits


def _keys(state, runner: EffectRunner, *keys: str):
    quits = []
    for key in keys:
        state, effects = update(state, KeyPressed(key))
        state, settled_quits = _settle(state, effects, runner)
        quits.extend(settled_quits)
    return state, quits


def _names(state) -> list[str]:
    return [entry.name for entry in state.active_entries]


class SessionFlowTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name).resolve()
        (self.root / "projects" / "src").mkdir(parents=True)
        (self.root / "projects" / "docs").mkdir()
        (self.root / "projects" / "README.md").write_text("readme\n", encoding="utf-8")
        (self.root / "projects" / "notes.txt").write_text("notes\n", encoding="utf-8")
        (self.root / "archive").mkdir()
        self.runner = EffectRunner()

    def test_parent_and_child_navigation_restore_cursor(self) -> None:
        state = load_initial_state(self.root / "projects", terminal_rows=24)
        self.assertEqual(_names(state), ["docs", "src", "README.md", "notes.txt"])

        state, _ = _keys(state, self.runner, "LEFT")
        self.assertEqual(state.current_path, self.root)
        self.assertEqual(_names(state), ["archive", "projects"])
        self.assertEqual(state.selected_entry.name, "projects")

        state, _ = _keys(state, self.runner, "RIGHT", "DOWN", "RIGHT")
        self.assertEqual(state.current_path, self.root / "projects" / "src")
        self.assertEqual(build_render_model(state).empty_message, "No files in this directory")

    def test_mutating_command_refreshes_listing(self) -> None:
        state = load_initial_state(self.root / "projects", terminal_rows=24)
        state, _ = _keys(state, self.runner, *"mkdir build", "ENTER")
        self.assertTrue((self.root / "projects" / "build").is_dir())
        self.assertIn("build", _names(state))
        self.assertEqual(state.status_message, "Command 'mkdir' executed successfully")

    def test_failed_removal_reports_error_and_keeps_listing(self) -> None:
        state = load_initial_state(self.root / "projects", terminal_rows=24)
        state, _ = _keys(state, self.runner, *"rm missing.txt", "ENTER")
        self.assertTrue(state.status_message.startswith("Error executing rm: exit status"))
        self.assertEqual(_names(state), ["docs", "src", "README.md", "notes.txt"])

    def test_unknown_command_reports_launch_error(self) -> None:
        state = load_initial_state(self.root / "projects", terminal_rows=24)
        state, _ = _keys(state, self.runner, *"shellfm-no-such-binary", "ENTER")
        self.assertTrue(state.status_message.startswith("Error executing shellfm-no-such-binary: exec:"))

    def test_cd_to_missing_directory_keeps_current_listing(self) -> None:
        state = load_initial_state(self.root / "projects", terminal_rows=24)
        state, _ = _keys(state, self.runner, *"cd nowhere", "ENTER")
        self.assertEqual(state.current_path, self.root / "projects")
        self.assertTrue(state.status_message.startswith("Error: open "))
        self.assertFalse(state.loading)

    def test_search_open_then_exit(self) -> None:
        state = load_initial_state(self.root / "projects", terminal_rows=24)
        state, _ = _keys(state, self.runner, "ESC", "s", "r", "c")
        self.assertEqual(_names(state), ["src"])
        state, _ = _keys(state, self.runner, "ENTER")
        self.assertEqual(state.current_path, self.root / "projects" / "src")
        self.assertIs(state.mode, Mode.SEARCH)
        state, _ = _keys(state, self.runner, "ESC")
        self.assertIs(state.mode, Mode.BROWSE)

    def test_quit_command_emits_quit(self) -> None:
        state = load_initial_state(self.root, terminal_rows=24)
        _state, quits = _keys(state, self.runner, *"quit", "ENTER")
        self.assertEqual(quits, [Quit()])


if __name__ == "__main__":
    unittest.main()
