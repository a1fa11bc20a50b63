"""
Durable client-side key/value storage.

Only small user preferences live here (currently the listings view mode). Values are stored as
JSON. Read and write failures are logged and never propagate: a broken store simply behaves as if
the value was never saved.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Generic, TypeVar

from hamfest.settings import get_settings

_logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class ClientStorage(ABC):
    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the raw stored string for ``key``, or None if nothing is stored."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass


class MemoryStorage(ClientStorage):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class JsonFileStorage(ClientStorage):
    """Stores all keys in a single JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = Lock()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Client storage file {self.path} does not contain a JSON object")
        return data

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._read()
            except ValueError:
                _logger.warning(f"Discarding unreadable client storage file {self.path}")
                data = {}
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f)


def get_default_storage() -> ClientStorage:
    return JsonFileStorage(get_settings().client_storage_path)


class PersistedValue(Generic[T]):
    """
    A single value mirrored to client storage.

    The stored value is read once when ``hydrate()`` is called (the constructor does so by default)
    and written back on every ``set()``. Until hydration has happened, ``value`` is the initial
    value and ``hydrated`` is False, so a caller can render the default first and reconcile with
    the persisted value afterwards.
    """

    def __init__(
        self,
        storage: ClientStorage,
        key: str,
        initial_value: T,
        parse: Callable[[Any], T] | None = None,
        hydrate: bool = True,
    ) -> None:
        self.storage = storage
        self.key = key
        self.initial_value = initial_value
        self._parse = parse
        self._value = initial_value
        self._hydrated = False

        if hydrate:
            self.hydrate()

    @property
    def value(self) -> T:
        return self._value

    @property
    def hydrated(self) -> bool:
        return self._hydrated

    def hydrate(self) -> T:
        stored = self._load()
        if stored is not _MISSING:
            self._value = stored  # type: ignore[assignment]
        self._hydrated = True
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        try:
            self.storage.set_item(self.key, json.dumps(self._dump(value)))
        except (OSError, TypeError, ValueError):
            _logger.exception(f"Error saving {self.key} to client storage")

    def _load(self) -> Any:
        try:
            raw = self.storage.get_item(self.key)
            if raw is None:
                return _MISSING
            decoded = json.loads(raw)
            return self._parse(decoded) if self._parse else decoded
        except (OSError, TypeError, ValueError):
            _logger.exception(f"Error loading {self.key} from client storage")
            return _MISSING

    @staticmethod
    def _dump(value: Any) -> Any:
        # enums are stored by value
        return getattr(value, "value", value)
