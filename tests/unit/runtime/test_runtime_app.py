"""Tests for opening a collection into the playback engine."""

from __future__ import annotations

import unittest

from lazyreel.config import credentials_present
from lazyreel.errors import ConfigurationMissing, ListingFailed
from lazyreel.playback import PlaybackStateMachine, PlaybackStatus, TimerScheduler
from lazyreel.runtime import credentials_check_for, open_collection
from lazyreel.sources import GitHubSource, LocalDirectorySource


class FakeSource:
    requires_credentials = False

    def __init__(self, paths: list[str] | None = None, error: Exception | None = None) -> None:
        self.paths = paths or []
        self.error = error
        self.listed: list[str] = []

    def list_documents(self, collection_ref: str) -> list[str]:
        self.listed.append(collection_ref)
        if self.error is not None:
            raise self.error
        return list(self.paths)

    def get_content(self, path: str) -> str:
        return path


class RecordingRequester:
    def __init__(self) -> None:
        self.paths: list[str] = []

    def request(self, path, callback, *, role="content") -> int:
        self.paths.append(path)
        return len(self.paths)


class OpenCollectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.requester = RecordingRequester()
        self.machine = PlaybackStateMachine(self.requester, TimerScheduler(clock=lambda: 0.0))

    def test_loads_order_and_autoplays_first_document(self) -> None:
        source = FakeSource(["b.txt", "a/y.txt", "a/x.txt"])
        nodes = open_collection(source, "repo", self.machine)

        self.assertEqual([node.name for node in nodes], ["b.txt", "a"])
        self.assertEqual(self.machine.sequence, ("a/x.txt", "a/y.txt", "b.txt"))
        self.assertEqual(self.machine.session.current_path, "a/x.txt")
        self.assertTrue(self.machine.session.is_playing)
        self.assertEqual(self.machine.session.status, PlaybackStatus.LOADING)
        self.assertEqual(self.requester.paths, ["a/x.txt", "a/y.txt"])

    def test_empty_collection_stays_idle(self) -> None:
        open_collection(FakeSource([]), "repo", self.machine)
        self.assertEqual(self.machine.session.status, PlaybackStatus.IDLE)
        self.assertEqual(self.requester.paths, [])

    def test_missing_credentials_stop_before_listing(self) -> None:
        source = FakeSource(["a.txt"])
        with self.assertRaises(ConfigurationMissing):
            open_collection(source, "repo", self.machine, credentials=lambda: False)
        self.assertEqual(source.listed, [])

    def test_listing_failure_propagates(self) -> None:
        source = FakeSource(error=ListingFailed("repo", "boom"))
        with self.assertRaises(ListingFailed):
            open_collection(source, "repo", self.machine)
        self.assertIsNone(self.machine.session.current_path)


class CredentialsCheckTests(unittest.TestCase):
    def test_local_sources_never_need_credentials(self) -> None:
        self.assertTrue(credentials_check_for(LocalDirectorySource())())

    def test_github_sources_use_configured_token_lookup(self) -> None:
        source = GitHubSource("token")
        self.addCleanup(source.close)
        self.assertIs(credentials_check_for(source), credentials_present)


if __name__ == "__main__":
    unittest.main()
