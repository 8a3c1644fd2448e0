# SPDX-License-Identifier: MIT

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

CORRUPT_SUFFIX = ".corrupt"


class PersistenceError(Exception):
    pass


class CorruptBlobError(PersistenceError):
    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"blob '{key}' is corrupt: {reason}")
        self.key = key
        self.reason = reason


class BlobWriteError(PersistenceError):
    def __init__(self, key: str, cause: OSError) -> None:
        super().__init__(f"could not write blob '{key}': {cause}")
        self.key = key
        self.cause = cause


class BlobStore(Protocol):
    def get(self, key: str) -> Optional[bytes]: ...

    def set(self, key: str, value: bytes) -> None: ...

    def delete(self, key: str) -> None: ...


class FileBlobStore:
    """One file per key under a data directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def __path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get(self, key: str) -> Optional[bytes]:
        path = self.__path(key)
        if not path.is_file():
            return None
        return path.read_bytes()

    def set(self, key: str, value: bytes) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.__path(key)
        # Write then rename so a crash never leaves a half-written blob
        temp_path = path.with_name(path.name + ".tmp")
        temp_path.write_bytes(value)
        temp_path.replace(path)

    def delete(self, key: str) -> None:
        path = self.__path(key)
        if path.exists():
            path.unlink()


class MemoryBlobStore:
    def __init__(self, blobs: Optional[dict[str, bytes]] = None) -> None:
        self.blobs: dict[str, bytes] = dict(blobs) if blobs is not None else {}

    def get(self, key: str) -> Optional[bytes]:
        return self.blobs.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.blobs[key] = value

    def delete(self, key: str) -> None:
        self.blobs.pop(key, None)


def decode_json_blob(key: str, blob: bytes) -> Any:
    try:
        return json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorruptBlobError(key, str(e)) from e


def encode_json_blob(value: Any) -> bytes:
    return json.dumps(value, ensure_ascii=False, sort_keys=True).encode("utf-8")


def quarantine_corrupt_blob(store: BlobStore, key: str, blob: bytes) -> None:
    """Keep the unreadable bytes around so the next save cannot destroy them."""
    try:
        store.set(key + CORRUPT_SUFFIX, blob)
    except OSError:
        logger.exception("could not preserve corrupt blob '%s'", key)


def write_blob(store: BlobStore, key: str, value: bytes, retry: bool = True) -> None:
    """
    Write a blob, retrying once on failure.

    Raises:
        BlobWriteError: If the write (and its retry, when enabled) failed
    """
    attempts = 2 if retry else 1
    for attempt in range(1, attempts + 1):
        try:
            store.set(key, value)
            return
        except OSError as e:
            if attempt < attempts:
                logger.warning("write of '%s' failed, retrying: %s", key, e)
                continue
            raise BlobWriteError(key, e) from e
