"""Persistent cache of resolved end-of-life lifecycle records."""

from __future__ import annotations

import hashlib
import json
import os
import shutil
import threading
import time
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from corrator.models.lifecycle import LifecycleRecord
from corrator.utils.logging import get_logger

logger = get_logger("cache")


def default_cache_dir() -> Path:
    """Return the default cache directory under the XDG data home."""
    data_home = os.environ.get("XDG_DATA_HOME")
    base = Path(data_home) if data_home else Path.home() / ".local" / "share"
    return base / "corrator" / "eol-cache"


def cache_key(product: str, version: str) -> str:
    """Natural key for a product release cycle."""
    return f"{product}::{version}"


class EolCache:
    """File-based store of lifecycle records keyed by ``product::version``.

    Each entry is a JSON document in the cache directory. Entries are
    created once and never rewritten; the only way to remove them is
    :meth:`clear`.

    Operations are serialised by a lock so workers auditing different
    containers can share one instance. Entry files are created with
    exclusive-create mode, so concurrent processes also keep the first
    record written for a key.

    Example:
        cache = EolCache()
        record = cache.get("ubuntu", "22.04")
        if record is None:
            record = cache.insert_if_absent("ubuntu", "22.04", fetched)
    """

    def __init__(self, cache_dir: Path | str | None = None) -> None:
        """Initialize the cache.

        Args:
            cache_dir: Directory for entry files. Defaults to the XDG data home.
        """
        self._cache_dir = Path(cache_dir) if cache_dir is not None else default_cache_dir()
        self._lock = threading.Lock()

    @property
    def cache_dir(self) -> Path:
        """Directory holding the entry files."""
        return self._cache_dir

    def _key_to_path(self, key: str) -> Path:
        """Convert a cache key to a file path."""
        key_hash = hashlib.sha256(key.encode()).hexdigest()[:32]
        return self._cache_dir / f"{key_hash}.json"

    def _read(self, path: Path) -> LifecycleRecord | None:
        try:
            data = json.loads(path.read_text())
            return LifecycleRecord.model_validate(data["record"])
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, KeyError, TypeError, OSError, PydanticValidationError) as e:
            logger.warning(f"Ignoring unreadable cache entry {path}: {e}")
            return None

    def get(self, product: str, version: str) -> LifecycleRecord | None:
        """Look up the record for a product release cycle.

        Args:
            product: Product name
            version: Release cycle

        Returns:
            The stored record, or None if absent
        """
        key = cache_key(product, version)
        with self._lock:
            record = self._read(self._key_to_path(key))
        if record is not None:
            logger.debug(f"Cache hit for {key}")
        return record

    def insert_if_absent(self, product: str, version: str, record: LifecycleRecord) -> LifecycleRecord:
        """Store record unless an entry already exists for the key.

        Args:
            product: Product name
            version: Release cycle
            record: Record to store

        Returns:
            The stored record, which is the existing one if the key was
            already present
        """
        key = cache_key(product, version)
        path = self._key_to_path(key)
        document = {
            "key": key,
            "product": product,
            "version": version,
            "record": record.to_cache(),
            "created_at": time.time(),
        }

        with self._lock:
            existing = self._read(path)
            if existing is not None:
                return existing

            self._cache_dir.mkdir(parents=True, exist_ok=True)
            # A corrupt entry is replaced; a readable one was returned above.
            path.unlink(missing_ok=True)
            try:
                with path.open("x") as f:
                    json.dump(document, f)
            except FileExistsError:
                existing = self._read(path)
                if existing is not None:
                    return existing
                raise

        logger.debug(f"Cached {key}")
        return record

    def clear(self) -> None:
        """Delete every cached entry."""
        with self._lock:
            if self._cache_dir.exists():
                shutil.rmtree(self._cache_dir)
        logger.info(f"Cleared EOL cache at {self._cache_dir}")

    def keys(self) -> list[str]:
        """Return the keys of all readable entries, sorted."""
        keys = []
        with self._lock:
            if not self._cache_dir.exists():
                return []
            for entry in self._cache_dir.glob("*.json"):
                try:
                    keys.append(json.loads(entry.read_text())["key"])
                except (json.JSONDecodeError, KeyError, TypeError, OSError):
                    continue
        return sorted(keys)

    def __len__(self) -> int:
        return len(self.keys())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self.keys()

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        file_count = 0
        total_size = 0

        if self._cache_dir.exists():
            for cache_file in self._cache_dir.glob("*.json"):
                file_count += 1
                total_size += cache_file.stat().st_size

        return {
            "cache_dir": str(self._cache_dir),
            "entries": file_count,
            "total_size_bytes": total_size,
        }
