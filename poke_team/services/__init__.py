"""Session services coordinating the roster and its persistence."""

from .snapshot_store import JsonFileSnapshotStore, MemorySnapshotStore, SnapshotStore
from .team_session import (
    STORAGE_KEY,
    DuplicateMemberError,
    MemberIndexError,
    MoveLimitError,
    TeamError,
    TeamFullError,
    TeamSession,
    coerce_level,
    create_session,
)

__all__ = [
    "STORAGE_KEY",
    "DuplicateMemberError",
    "JsonFileSnapshotStore",
    "MemberIndexError",
    "MemorySnapshotStore",
    "MoveLimitError",
    "SnapshotStore",
    "TeamError",
    "TeamFullError",
    "TeamSession",
    "coerce_level",
    "create_session",
]
