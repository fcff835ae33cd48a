"""Tests for player key dispatch and sidebar cursor handling."""

from __future__ import annotations

import unittest

from lazyreel.document_tree import build_document_tree, flatten, iter_tree_rows
from lazyreel.playback import PlaybackStateMachine, PlaybackStatus, TimerScheduler
from lazyreel.runtime.loop import (
    PlayerKeyCallbacks,
    PlayerViewState,
    clamp_tree_start,
    handle_player_key,
    sync_cursor_to_current,
)
from lazyreel.runtime.render import RenderedDocumentCache
from lazyreel.ui_theme import PLAIN_THEME

PATHS = ["a/x.txt", "a/y.txt", "b.txt"]


class RecordingRequester:
    def __init__(self) -> None:
        self.requests: list[tuple[str, object]] = []

    def request(self, path, callback, *, role="content") -> int:
        self.requests.append((path, callback))
        return len(self.requests)

    def resolve(self, path: str, content: str) -> None:
        for req_path, callback in reversed(self.requests):
            if req_path == path:
                callback(req_path, content, None)
                return


class HandlePlayerKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.requester = RecordingRequester()
        self.machine = PlaybackStateMachine(self.requester, TimerScheduler(clock=lambda: 0.0))
        nodes = build_document_tree(PATHS)
        self.machine.load_sequence(flatten(nodes))
        self.view = PlayerViewState(tree_rows=list(iter_tree_rows(nodes)), theme_name="monokai", no_color=True)
        self.cache = RenderedDocumentCache(PLAIN_THEME)
        self.saved_speeds: list[float] = []
        self.saved_themes: list[str] = []
        self.callbacks = PlayerKeyCallbacks(
            save_speed=self.saved_speeds.append,
            save_theme_name=self.saved_themes.append,
        )

    def press(self, key: str) -> bool:
        return handle_player_key(key, self.machine, self.view, self.cache, self.callbacks)

    def test_quit_keys(self) -> None:
        self.assertTrue(self.press("q"))
        self.assertTrue(self.press("CTRL_C"))
        self.assertFalse(self.press("x"))

    def test_space_toggles_playback(self) -> None:
        self.machine.select_document("a/x.txt")
        self.requester.resolve("a/x.txt", "body")
        self.press("SPACE")
        self.assertEqual(self.machine.session.status, PlaybackStatus.PLAYING)
        self.press("SPACE")
        self.assertEqual(self.machine.session.status, PlaybackStatus.READY)

    def test_next_and_previous_keys(self) -> None:
        self.press("n")
        self.assertEqual(self.machine.session.current_path, "a/x.txt")
        self.press("RIGHT")
        self.assertEqual(self.machine.session.current_path, "a/y.txt")
        self.press("p")
        self.assertEqual(self.machine.session.current_path, "a/x.txt")

    def test_speed_keys_step_through_options_and_persist(self) -> None:
        self.press("+")
        self.press("+")
        self.press("-")
        self.assertEqual(self.machine.session.speed_multiplier, 1.5)
        self.assertEqual(self.saved_speeds, [1.5, 2.0, 1.5])

    def test_theme_key_cycles_and_persists(self) -> None:
        self.press("t")
        self.assertEqual(self.view.theme_name, "nord")
        self.assertEqual(self.saved_themes, ["nord"])
        self.assertIs(self.cache.theme, PLAIN_THEME)

    def test_enter_selects_file_under_cursor_without_autoplay(self) -> None:
        self.press("DOWN")
        self.press("j")
        self.press("ENTER")
        self.assertEqual(self.machine.session.current_path, "a/y.txt")
        self.assertFalse(self.machine.session.is_playing)

    def test_enter_on_folder_does_nothing(self) -> None:
        self.press("ENTER")
        self.assertIsNone(self.machine.session.current_path)

    def test_cursor_is_clamped(self) -> None:
        self.press("UP")
        self.assertEqual(self.view.cursor, 0)
        for _ in range(10):
            self.press("DOWN")
        self.assertEqual(self.view.cursor, len(self.view.tree_rows) - 1)


class CursorSyncTests(unittest.TestCase):
    def setUp(self) -> None:
        self.view = PlayerViewState(tree_rows=list(iter_tree_rows(build_document_tree(PATHS))), dirty=False)

    def test_cursor_follows_new_current_path_once(self) -> None:
        sync_cursor_to_current(self.view, "b.txt")
        self.assertEqual(self.view.cursor, 3)
        self.assertTrue(self.view.dirty)

        self.view.cursor = 0
        sync_cursor_to_current(self.view, "b.txt")
        self.assertEqual(self.view.cursor, 0)

    def test_tree_start_keeps_cursor_visible(self) -> None:
        self.view.cursor = 3
        clamp_tree_start(self.view, 2)
        self.assertEqual(self.view.tree_start, 2)
        self.view.cursor = 0
        clamp_tree_start(self.view, 2)
        self.assertEqual(self.view.tree_start, 0)


if __name__ == "__main__":
    unittest.main()
