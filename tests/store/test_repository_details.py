"""Tests for the commit and stash detail panels and the branch/stash lists."""

from __future__ import annotations

import asyncio

from conftest import FakeConfirmer, FakeTransport, RecordingNotifier, commit_hash, settle

from aiorepostate.store import RepositoryStore


class TestCommitDetails:
    async def test_load(self, opened_store: RepositoryStore, transport: FakeTransport) -> None:
        await opened_store.load_commit_details(commit_hash(3))

        details = opened_store.selected_commit_details
        assert details is not None
        assert details.hash == commit_hash(3)
        assert [f.path for f in details.files_changed] == ["f.ts"]
        assert opened_store.commit_details_loading is False

    async def test_new_selection_resets_side_state(self, opened_store: RepositoryStore) -> None:
        await opened_store.load_commit_details(commit_hash(3))
        opened_store.toggle_commit_file_expanded("f.ts")
        await opened_store.load_commit_file_diff(commit_hash(3), "f.ts")
        assert opened_store.expanded_commit_files == {"f.ts"}

        await opened_store.load_commit_details(commit_hash(4))

        assert opened_store.expanded_commit_files == frozenset()
        assert opened_store.commit_file_diffs == {}

    async def test_toggle_expanded(self, opened_store: RepositoryStore) -> None:
        opened_store.toggle_commit_file_expanded("a")
        opened_store.toggle_commit_file_expanded("b")
        opened_store.toggle_commit_file_expanded("a")
        assert opened_store.expanded_commit_files == {"b"}

    async def test_latest_selection_wins(
        self, opened_store: RepositoryStore, transport: FakeTransport
    ) -> None:
        gate = transport.hold("get_commit_details")
        first = asyncio.create_task(opened_store.load_commit_details(commit_hash(1)))
        second = asyncio.create_task(opened_store.load_commit_details(commit_hash(2)))
        await settle()
        gate.set()
        await asyncio.gather(first, second)

        assert opened_store.selected_commit_details is not None
        assert opened_store.selected_commit_details.hash == commit_hash(2)
        assert opened_store.commit_details_loading is False

    async def test_diff_for_previous_commit_dropped(
        self, opened_store: RepositoryStore, transport: FakeTransport
    ) -> None:
        await opened_store.load_commit_details(commit_hash(1))
        gate = transport.hold("get_commit_file_diff")
        pending = asyncio.create_task(opened_store.load_commit_file_diff(commit_hash(1), "f.ts"))
        await settle()

        del transport.gates["get_commit_file_diff"]
        await opened_store.load_commit_details(commit_hash(2))
        gate.set()
        await pending

        assert opened_store.commit_file_diffs == {}

    async def test_failure_reported(
        self,
        opened_store: RepositoryStore,
        transport: FakeTransport,
        notifier: RecordingNotifier,
    ) -> None:
        transport.errors["get_commit_details"] = RuntimeError("Git error: odb: object not found")
        await opened_store.load_commit_details(commit_hash(1))

        assert notifier.errors == ["odb: object not found"]
        assert opened_store.commit_details_loading is False

    async def test_clear(self, opened_store: RepositoryStore) -> None:
        await opened_store.load_commit_details(commit_hash(1))
        opened_store.clear_commit_details()
        assert opened_store.selected_commit_details is None


class TestStashDetails:
    async def test_load_and_diff(
        self, opened_store: RepositoryStore, transport: FakeTransport
    ) -> None:
        await opened_store.load_stash_details(1)
        opened_store.toggle_stash_file_expanded("stash1.py")
        await opened_store.load_stash_file_diff(1, "stash1.py")

        assert opened_store.selected_stash_details is not None
        assert opened_store.selected_stash_details.index == 1
        assert opened_store.expanded_stash_files == {"stash1.py"}
        assert list(opened_store.stash_file_diffs) == ["stash1.py"]
        assert transport.calls_to("get_stash_file_diff") == [
            {"index": 1, "file_path": "stash1.py"}
        ]

    async def test_loading_file_diff_closes_stash(self, opened_store: RepositoryStore) -> None:
        await opened_store.load_stash_details(0)
        opened_store.toggle_stash_file_expanded("stash0.py")
        await opened_store.load_stash_file_diff(0, "stash0.py")

        await opened_store.load_file_diff("f.ts", False)

        assert opened_store.selected_stash_details is None
        assert opened_store.expanded_stash_files == frozenset()
        assert opened_store.stash_file_diffs == {}
        assert opened_store.current_diff_path == "f.ts"

    async def test_drop_selected_stash_clears_details(
        self, opened_store: RepositoryStore, transport: FakeTransport
    ) -> None:
        await opened_store.load_stash_details(0)
        opened_store.toggle_stash_file_expanded("stash0.py")
        await opened_store.load_stash_file_diff(0, "stash0.py")
        await opened_store.drop_stash(0)

        assert transport.calls_to("drop_stash") == [{"index": 0}]
        assert "list_stashes" in transport.commands()
        assert opened_store.selected_stash_details is None
        assert opened_store.expanded_stash_files == frozenset()
        assert opened_store.stash_file_diffs == {}

    async def test_drop_other_stash_keeps_details(self, opened_store: RepositoryStore) -> None:
        await opened_store.load_stash_details(0)
        await opened_store.drop_stash(1)

        assert opened_store.selected_stash_details is not None
        assert opened_store.selected_stash_details.index == 0

    async def test_drop_with_confirmation_declined(
        self,
        opened_store: RepositoryStore,
        transport: FakeTransport,
        confirmer: FakeConfirmer,
    ) -> None:
        confirmer.answer = False
        await opened_store.drop_stash(0, confirm=True)

        assert confirmer.requests[0].title == "Drop stash"
        assert transport.calls == []


class TestRefLists:
    async def test_loaded_together(
        self, opened_store: RepositoryStore, transport: FakeTransport
    ) -> None:
        await opened_store.load_branches_and_tags()

        assert [b.name for b in opened_store.branches] == ["main", "origin/main"]
        assert [t.name for t in opened_store.tags] == ["v1.0"]
        assert [s.index for s in opened_store.stashes] == [0, 1]

    async def test_one_failure_keeps_previous_lists(
        self,
        opened_store: RepositoryStore,
        transport: FakeTransport,
        notifier: RecordingNotifier,
    ) -> None:
        await opened_store.load_branches_and_tags()
        transport.errors["list_tags"] = RuntimeError("reference is corrupt")

        await opened_store.load_branches_and_tags()

        assert notifier.errors == ["reference is corrupt"]
        assert len(opened_store.branches) == 2
        assert len(opened_store.tags) == 1

    async def test_load_stashes_alone(
        self, opened_store: RepositoryStore, transport: FakeTransport
    ) -> None:
        await opened_store.load_stashes()

        assert transport.commands() == ["list_stashes"]
        assert len(opened_store.stashes) == 2
        assert opened_store.branches == ()
