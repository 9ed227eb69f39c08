"""Navigation controller: the reducer driving browse/search state.

``update(state, event)`` is pure. It returns the next ``NavigationState``
plus a tuple of effects for the runtime to execute. Loads are tagged with
request ids; only the newest in-flight load may change the listing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from .commands import DEFAULT_OUTPUT_LIMIT, CommandKind, describe_result, dispatch, needs_refresh
from .effects import Effect, LoadDirectory, Quit, RunCommand
from .entries import Snapshot, index_of_name
from .events import CommandFinished, DirectoryLoaded, Event, KeyPressed, Resized
from .filtering import filter_entries
from .keymap import (
    BACKSPACE,
    CTRL_C,
    DOWN,
    ENTER,
    ESC,
    LEFT,
    RIGHT,
    UP,
    KeyBinding,
    KeyTable,
    is_printable_key,
)
from .sorting import SORT_KEY_DIGITS, SortKey, sort_entries
from .state import DEFAULT_TERMINAL_ROWS, Mode, NavigationState
from .viewport import Viewport, compute_viewport, reserved_rows_for

logger = logging.getLogger(__name__)

Transition = tuple[NavigationState, tuple[Effect, ...]]
KeyHandler = Callable[[NavigationState, str], Transition]

SEARCH_UP_ALIASES = (UP, "k")
SEARCH_DOWN_ALIASES = (DOWN, "j")


def initial_state(
    path: Path,
    entries: Snapshot,
    *,
    terminal_rows: int = DEFAULT_TERMINAL_ROWS,
    sort_key: SortKey = SortKey.NAME,
) -> NavigationState:
    """Build the startup state from a synchronously read listing."""
    ordered = sort_entries(entries, sort_key)
    state = NavigationState(
        current_path=path,
        entries=ordered,
        filtered=ordered,
        sort_key=sort_key,
        terminal_rows=max(1, terminal_rows),
    )
    return with_viewport(state)


def viewport_for(state: NavigationState) -> Viewport:
    return compute_viewport(
        state.cursor,
        len(state.active_entries),
        state.terminal_rows,
        reserved_rows_for(state.mode),
        state.scroll_offset,
    )


def with_viewport(state: NavigationState) -> NavigationState:
    """Clamp the cursor into the active snapshot and re-window the scroll."""
    active_len = len(state.active_entries)
    cursor = max(0, min(state.cursor, max(0, active_len - 1)))
    state = replace(state, cursor=cursor)
    return replace(state, scroll_offset=viewport_for(state).scroll_offset)


def request_load(state: NavigationState, path: Path, return_name: str = "") -> Transition:
    """Make a load of ``path`` the current intent and emit its effect."""
    request = LoadDirectory(request_id=state.next_request_id, path=path, return_name=return_name)
    logger.debug("load #%d requested for %s", request.request_id, path)
    state = replace(
        state,
        pending_load=request,
        pending_return_name=return_name,
        next_request_id=state.next_request_id + 1,
    )
    return state, (request,)


def _move_cursor(state: NavigationState, delta: int) -> Transition:
    active_len = len(state.active_entries)
    cursor = max(0, min(state.cursor + delta, max(0, active_len - 1)))
    if cursor == state.cursor:
        return state, ()
    return with_viewport(replace(state, cursor=cursor)), ()


def _interrupt(state: NavigationState, _key: str) -> Transition:
    return state, (Quit(interrupted=True),)


# Browse mode.


def _browse_up(state: NavigationState, _key: str) -> Transition:
    return _move_cursor(state, -1)


def _browse_down(state: NavigationState, _key: str) -> Transition:
    return _move_cursor(state, 1)


def _browse_parent(state: NavigationState, _key: str) -> Transition:
    parent = state.current_path.parent
    if parent == state.current_path:
        return state, ()
    return request_load(state, parent, state.current_path.name)


def _browse_enter_selected(state: NavigationState, _key: str) -> Transition:
    selected = state.selected_entry
    if selected is None or not selected.is_dir:
        return state, ()
    return request_load(state, state.current_path / selected.name, state.current_path.name)


def _browse_submit(state: NavigationState, _key: str) -> Transition:
    line = state.command_input.strip()
    state = replace(state, command_input="")
    result = dispatch(line, state.current_path, request_id=state.next_request_id)
    if result.kind is CommandKind.NONE:
        return state, ()
    if result.status_message is not None:
        state = replace(state, status_message=result.status_message)

    effect = result.effect
    if isinstance(effect, LoadDirectory):
        return request_load(state, effect.path)
    if isinstance(effect, RunCommand):
        state = replace(
            state,
            status_message=f"Running {effect.command}...",
            next_request_id=state.next_request_id + 1,
        )
        return state, (effect,)
    if effect is not None:
        return state, (effect,)
    return state, ()


def _browse_backspace(state: NavigationState, _key: str) -> Transition:
    if not state.command_input:
        return state, ()
    return replace(state, command_input=state.command_input[:-1]), ()


def _browse_enter_search(state: NavigationState, _key: str) -> Transition:
    state = replace(state, mode=Mode.SEARCH, search_token="", filtered=state.entries)
    return with_viewport(state), ()


def _browse_type(state: NavigationState, key: str) -> Transition:
    if not is_printable_key(key):
        return state, ()
    return replace(state, command_input=state.command_input + key), ()


BROWSE_KEYS: KeyTable[KeyHandler] = KeyTable(fallback=_browse_type).register_bindings(
    KeyBinding((UP,), _browse_up),
    KeyBinding((DOWN,), _browse_down),
    KeyBinding((LEFT,), _browse_parent),
    KeyBinding((RIGHT,), _browse_enter_selected),
    KeyBinding((ENTER,), _browse_submit),
    KeyBinding((BACKSPACE,), _browse_backspace),
    KeyBinding((ESC,), _browse_enter_search),
    KeyBinding((CTRL_C,), _interrupt),
)


# Search mode.


def _refilter(state: NavigationState, token: str) -> NavigationState:
    state = replace(
        state,
        search_token=token,
        filtered=filter_entries(state.entries, token),
        cursor=0,
        scroll_offset=0,
    )
    return with_viewport(state)


def _search_exit(state: NavigationState, _key: str) -> Transition:
    selected = state.selected_entry
    cursor = state.cursor
    if selected is not None and selected in state.entries:
        cursor = state.entries.index(selected)
    state = replace(
        state,
        mode=Mode.BROWSE,
        search_token="",
        filtered=state.entries,
        cursor=cursor,
    )
    return with_viewport(state), ()


def _search_up(state: NavigationState, _key: str) -> Transition:
    return _move_cursor(state, -1)


def _search_down(state: NavigationState, _key: str) -> Transition:
    return _move_cursor(state, 1)


def _search_sort(state: NavigationState, key: str) -> Transition:
    sort_key = SORT_KEY_DIGITS[key]
    state = replace(state, sort_key=sort_key, entries=sort_entries(state.entries, sort_key))
    return _refilter(state, state.search_token), ()


def _search_open(state: NavigationState, _key: str) -> Transition:
    selected = state.selected_entry
    if selected is None or not selected.is_dir:
        return state, ()
    target = state.current_path / selected.name
    state = replace(state, search_token="", filtered=state.entries)
    return request_load(state, target, state.current_path.name)


def _search_backspace(state: NavigationState, _key: str) -> Transition:
    if not state.search_token:
        return state, ()
    return _refilter(state, state.search_token[:-1]), ()


def _search_type(state: NavigationState, key: str) -> Transition:
    if not is_printable_key(key):
        return state, ()
    return _refilter(state, state.search_token + key), ()


SEARCH_KEYS: KeyTable[KeyHandler] = KeyTable(fallback=_search_type).register_bindings(
    KeyBinding((ESC,), _search_exit),
    KeyBinding(SEARCH_UP_ALIASES, _search_up),
    KeyBinding(SEARCH_DOWN_ALIASES, _search_down),
    KeyBinding(tuple(SORT_KEY_DIGITS), _search_sort),
    KeyBinding((ENTER,), _search_open),
    KeyBinding((BACKSPACE,), _search_backspace),
    KeyBinding((CTRL_C,), _interrupt),
)


# Async results.


def _apply_directory_loaded(state: NavigationState, event: DirectoryLoaded) -> Transition:
    pending = state.pending_load
    if pending is None or pending.request_id != event.request.request_id:
        logger.debug("discarding stale load #%d for %s", event.request.request_id, event.request.path)
        return state, ()

    if event.error is not None:
        state = replace(
            state,
            status_message=f"Error: {event.error}",
            pending_load=None,
            pending_return_name="",
        )
        return state, ()

    entries = sort_entries(event.entries, state.sort_key)
    state = replace(
        state,
        current_path=event.request.path,
        entries=entries,
        filtered=entries,
        pending_load=None,
        scroll_offset=0,
    )
    # The search token survives a load; only key input re-filters.
    cursor = 0
    if state.pending_return_name:
        cursor = index_of_name(entries, state.pending_return_name)
    state = replace(state, cursor=cursor, pending_return_name="")
    return with_viewport(state), ()


def _apply_command_finished(
    state: NavigationState,
    event: CommandFinished,
    output_limit: int,
) -> Transition:
    state = replace(state, status_message=describe_result(event, output_limit))
    if not needs_refresh(event):
        return state, ()
    cwd = event.request.cwd
    if cwd != state.current_path:
        return state, ()
    if state.pending_load is not None and state.pending_load.path != cwd:
        return state, ()
    return request_load(state, cwd)


def update(
    state: NavigationState,
    event: Event,
    output_limit: int = DEFAULT_OUTPUT_LIMIT,
) -> Transition:
    """Apply one event and return ``(next_state, effects)``."""
    if isinstance(event, KeyPressed):
        table = SEARCH_KEYS if state.mode is Mode.SEARCH else BROWSE_KEYS
        handler = table.lookup(event.key)
        if handler is None:
            return state, ()
        return handler(state, event.key)
    if isinstance(event, DirectoryLoaded):
        return _apply_directory_loaded(state, event)
    if isinstance(event, CommandFinished):
        return _apply_command_finished(state, event, output_limit)
    if isinstance(event, Resized):
        return with_viewport(replace(state, terminal_rows=max(1, event.rows))), ()
    raise TypeError(f"unsupported event: {event!r}")


__all__ = [
    "Transition",
    "initial_state",
    "viewport_for",
    "with_viewport",
    "request_load",
    "update",
    "BROWSE_KEYS",
    "SEARCH_KEYS",
]
