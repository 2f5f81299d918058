"""Shared fixtures for aiorepostate tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any

import pytest

from aiorepostate.config import StoreSettings
from aiorepostate.engine import EngineClient
from aiorepostate.models import ConfirmRequest
from aiorepostate.store import RepositoryStore

HEAD = "abc123" + "0" * 34


def commit_hash(i: int) -> str:
    return f"{i:040x}"


def make_commit(i: int) -> dict[str, Any]:
    return {
        "hash": commit_hash(i),
        "short_hash": commit_hash(i)[:7],
        "message": f"Commit {i}\n\nBody of commit {i}",
        "author_name": "Ada",
        "author_email": "ada@example.com",
        "timestamp": 1_700_000_000 - i,
        "parent_hashes": [commit_hash(i + 1)],
        "column": 0,
        "lines": [{"from_column": 0, "to_column": 0, "is_merge": False, "line_type": "to_parent"}],
        "refs": [{"name": "main", "ref_type": "branch", "is_head": True}] if i == 0 else [],
        "is_tip": i == 0,
    }


def history(total: int) -> Callable[..., list[dict[str, Any]]]:
    """Engine handler serving *total* commits through skip/limit paging."""

    def handler(skip: int, limit: int) -> list[dict[str, Any]]:
        return [make_commit(i) for i in range(skip, min(skip + limit, total))]

    return handler


def make_diff(path: str, hunks: int = 2) -> dict[str, Any]:
    return {
        "path": path,
        "is_binary": False,
        "hunks": [
            {
                "header": f"@@ -{10 * h + 1},3 +{10 * h + 1},3 @@",
                "old_start": 10 * h + 1,
                "old_lines": 3,
                "new_start": 10 * h + 1,
                "new_lines": 3,
                "lines": [
                    {
                        "content": "context",
                        "line_type": "context",
                        "old_lineno": 1,
                        "new_lineno": 1,
                    },
                    {"content": f"old {h}", "line_type": "deletion", "old_lineno": 2},
                    {"content": f"new {h}", "line_type": "addition", "new_lineno": 2},
                ],
            }
            for h in range(hunks)
        ],
    }


def make_statuses(
    staged: Sequence[str] = (),
    unstaged: Sequence[str] = (),
    untracked: Sequence[str] = (),
) -> dict[str, Any]:
    return {
        "staged": [{"path": p, "status": "modified", "is_staged": True} for p in staged],
        "unstaged": [{"path": p, "status": "modified", "is_staged": False} for p in unstaged],
        "untracked": [{"path": p, "status": "untracked", "is_staged": False} for p in untracked],
    }


def make_stash(index: int) -> dict[str, Any]:
    return {
        "index": index,
        "message": f"WIP {index}",
        "commit_hash": commit_hash(1000 + index),
        "timestamp": 1_700_000_000,
        "branch_name": "main",
        "files_changed": [{"path": f"stash{index}.py", "status": "modified"}],
    }


def make_stash_info(index: int) -> dict[str, Any]:
    info = make_stash(index)
    del info["files_changed"]
    return info


def make_commit_details(i: int) -> dict[str, Any]:
    return {
        "hash": commit_hash(i),
        "message": f"Commit {i}",
        "author_name": "Ada",
        "author_email": "ada@example.com",
        "committer_name": "Ada",
        "committer_email": "ada@example.com",
        "timestamp": 1_700_000_000 - i,
        "parent_hashes": [commit_hash(i + 1)],
        "files_changed": [{"path": "f.ts", "status": "modified"}],
    }


class FakeTransport:
    """Scripted engine.

    ``responses`` maps a command to a value or to a callable receiving the
    call arguments; ``errors`` makes a command raise; ``gates`` holds a
    command until its event is set.
    """

    def __init__(self) -> None:
        self.responses: dict[str, Any] = {}
        self.errors: dict[str, BaseException] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def invoke(self, command: str, args: dict[str, Any]) -> Any:
        self.calls.append((command, dict(args)))
        gate = self.gates.get(command)
        if gate is not None:
            await gate.wait()
        if command in self.errors:
            raise self.errors[command]
        response = self.responses.get(command)
        if callable(response):
            return response(**args)
        return response

    def hold(self, command: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[command] = gate
        return gate

    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]

    def calls_to(self, command: str) -> list[dict[str, Any]]:
        return [args for name, args in self.calls if name == command]

    def reset_calls(self) -> None:
        self.calls.clear()


class RecordingNotifier:
    def __init__(self) -> None:
        self.errors: list[str] = []
        self.successes: list[str] = []
        self.dismissed: list[int] = []

    def show_error(self, message: str) -> int:
        self.errors.append(message)
        return len(self.errors) + len(self.successes)

    def show_success(self, message: str) -> int:
        self.successes.append(message)
        return len(self.errors) + len(self.successes)

    def dismiss(self, notification_id: int) -> None:
        self.dismissed.append(notification_id)


class FakeConfirmer:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.requests: list[ConfirmRequest] = []

    async def show_confirm(self, request: ConfirmRequest) -> bool:
        self.requests.append(request)
        return self.answer


async def settle() -> None:
    """Let pending tasks run up to their next real suspension point."""
    for _ in range(10):
        await asyncio.sleep(0)


@pytest.fixture
def transport() -> FakeTransport:
    fake = FakeTransport()
    fake.responses.update(
        {
            "open_repository": lambda path: {
                "path": path,
                "current_branch": "main",
                "is_detached": False,
                "remotes": ["origin"],
                "head_hash": HEAD,
            },
            "get_repository_info": {
                "path": "/repo/a",
                "current_branch": "main",
                "is_detached": False,
                "remotes": ["origin"],
                "head_hash": HEAD,
            },
            "get_commit_graph": history(250),
            "get_file_statuses": make_statuses(
                staged=["s.py"], unstaged=["f.ts"], untracked=["n.md"]
            ),
            "get_file_diff": lambda path, staged, is_untracked: make_diff(path),
            "get_commit_details": lambda hash: make_commit_details(int(hash, 16)),
            "get_commit_file_diff": lambda hash, file_path: make_diff(file_path, hunks=1),
            "list_branches": [
                {"name": "main", "is_remote": False, "is_head": True, "target_hash": HEAD},
                {"name": "origin/main", "is_remote": True, "is_head": False, "target_hash": HEAD},
            ],
            "list_tags": [{"name": "v1.0", "target_hash": HEAD, "is_annotated": False}],
            "list_stashes": [make_stash_info(i) for i in range(2)],
            "get_stash_details": lambda index: make_stash(index),
            "get_stash_file_diff": lambda index, file_path: make_diff(file_path, hunks=1),
            "create_commit": HEAD,
        }
    )
    return fake


@pytest.fixture
def client(transport: FakeTransport) -> EngineClient:
    return EngineClient(transport)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def confirmer() -> FakeConfirmer:
    return FakeConfirmer()


@pytest.fixture
def store(
    client: EngineClient, notifier: RecordingNotifier, confirmer: FakeConfirmer
) -> RepositoryStore:
    return RepositoryStore(
        client,
        notifier=notifier,
        confirmer=confirmer,
        settings=StoreSettings(commits_per_page=100),
    )


@pytest.fixture
async def opened_store(store: RepositoryStore, transport: FakeTransport) -> RepositoryStore:
    """Store with ``/repo/a`` open and the call log cleared."""
    await store.open("/repo/a")
    transport.reset_calls()
    return store
