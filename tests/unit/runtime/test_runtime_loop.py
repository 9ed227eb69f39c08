from __future__ import annotations

import os
import unittest
from contextlib import contextmanager
from pathlib import Path

from shellfm.controller import initial_state
from shellfm.effects import LoadDirectory
from shellfm.entries import Entry
from shellfm.events import DirectoryLoaded
from shellfm.runtime import ExitReason, RuntimeLoopDeps, RuntimeLoopTiming, run_main_loop


def _make_state(rows: int = 24):
    entries = (Entry("src", True), Entry("README.md", False))
    return initial_state(Path("/home/user/projects"), entries, terminal_rows=rows)


class _FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1


class _FakeRunner:
    def __init__(self, respond=None) -> None:
        self.submitted: list = []
        self._respond = respond
        self._pending: list = []

    def submit(self, effect) -> None:
        self.submitted.append(effect)
        if self._respond is not None:
            self._pending.append(self._respond(effect))

    def drain_results(self) -> list:
        out, self._pending = self._pending, []
        return out


def _deps(keys: list[str], draws: list, size=(80, 24), **overrides) -> RuntimeLoopDeps:
    key_iter = iter(keys)
    return RuntimeLoopDeps(
        draw=lambda model, columns, rows: draws.append((model, columns, rows)),
        read_key=lambda _fd, _timeout_ms: next(key_iter),
        terminal_size=lambda: os.terminal_size(size),
        **overrides,
    )


class RuntimeLoopTests(unittest.TestCase):
    def test_quit_command_ends_loop_normally(self) -> None:
        draws: list = []
        terminal = _FakeTerminal()
        reason, state = run_main_loop(
            _make_state(),
            terminal,
            0,
            _FakeRunner(),
            _deps([*"quit", "ENTER"], draws),
            RuntimeLoopTiming(key_poll_ms=1),
        )
        self.assertIs(reason, ExitReason.QUIT)
        self.assertEqual(state.command_input, "")
        self.assertEqual((terminal.entered, terminal.exited), (1, 1))
        self.assertGreaterEqual(len(draws), 1)

    def test_ctrl_c_reports_interrupt(self) -> None:
        reason, _state = run_main_loop(_make_state(), _FakeTerminal(), 0, _FakeRunner(), _deps(["CTRL_C"], []))
        self.assertIs(reason, ExitReason.INTERRUPT)

    def test_idle_polls_do_not_redraw(self) -> None:
        draws: list = []
        run_main_loop(_make_state(), _FakeTerminal(), 0, _FakeRunner(), _deps(["", "", "", "CTRL_C"], draws))
        self.assertEqual(len(draws), 1)
        _model, columns, rows = draws[0]
        self.assertEqual((columns, rows), (80, 24))

    def test_terminal_height_change_is_applied_before_drawing(self) -> None:
        draws: list = []
        _reason, state = run_main_loop(
            _make_state(rows=24),
            _FakeTerminal(),
            0,
            _FakeRunner(),
            _deps(["CTRL_C"], draws, size=(100, 12)),
        )
        self.assertEqual(state.terminal_rows, 12)
        self.assertEqual(draws[0][1:], (100, 12))

    def test_effects_are_submitted_and_results_applied(self) -> None:
        def respond(effect: LoadDirectory) -> DirectoryLoaded:
            return DirectoryLoaded(request=effect, entries=(Entry("archive", True), Entry("projects", True)))

        runner = _FakeRunner(respond)
        draws: list = []
        _reason, state = run_main_loop(_make_state(), _FakeTerminal(), 0, runner, _deps(["LEFT", "", "CTRL_C"], draws))

        self.assertEqual(runner.submitted, [LoadDirectory(request_id=1, path=Path("/home/user"), return_name="projects")])
        self.assertEqual(state.current_path, Path("/home/user"))
        self.assertEqual(state.selected_entry.name, "projects")
        self.assertEqual(draws[-1][0].current_path, "/home/user")
        self.assertFalse(draws[-1][0].loading)

    def test_terminal_is_restored_when_reducer_raises(self) -> None:
        def boom(_state, _event):
            raise RuntimeError("reducer failed")

        terminal = _FakeTerminal()
        with self.assertRaises(RuntimeError):
            run_main_loop(_make_state(), terminal, 0, _FakeRunner(), _deps(["x"], [], reducer=boom))
        self.assertEqual(terminal.exited, 1)


if __name__ == "__main__":
    unittest.main()
