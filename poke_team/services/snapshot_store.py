"""Flat key/value snapshot storage for the session state."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol


class SnapshotStore(Protocol):
    def save(self, key: str, data: Any) -> None: ...

    def load(self, key: str) -> Optional[Any]: ...

    def remove(self, key: str) -> None: ...


class MemorySnapshotStore:
    """Keeps snapshots in a dict; values are JSON round-tripped like the file store."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def save(self, key: str, data: Any) -> None:
        self._data[key] = json.dumps(data)

    def load(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileSnapshotStore:
    """Stores every key in a single JSON object on disk.

    Read and write failures are reported through ``debug_logger`` and never
    raised; a failed ``load`` returns ``None``.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.path = Path(path)
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    def save(self, key: str, data: Any) -> None:
        try:
            try:
                contents = self._read_all()
            except ValueError as exc:
                self._debug(f"Discarding unreadable snapshot file: {exc}")
                contents = {}
            contents[key] = data
            self._write_all(contents)
        except (OSError, TypeError, ValueError) as exc:
            self._debug(f"Error saving snapshot {key!r}: {exc}")

    def load(self, key: str) -> Optional[Any]:
        try:
            return self._read_all().get(key)
        except (OSError, ValueError) as exc:
            self._debug(f"Error loading snapshot {key!r}: {exc}")
            return None

    def remove(self, key: str) -> None:
        try:
            contents = self._read_all()
            if key in contents:
                del contents[key]
                self._write_all(contents)
        except (OSError, ValueError) as exc:
            self._debug(f"Error removing snapshot {key!r}: {exc}")

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _write_all(self, contents: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(contents, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)
