from typing import Optional

import pendulum
import pytest

from yizhi.repository.blob_store import MemoryBlobStore


def local_day(year: int, month: int, day: int) -> pendulum.DateTime:
    return pendulum.datetime(year, month, day, tz="local")


class FlakyBlobStore(MemoryBlobStore):
    """Memory store whose next `failures` writes raise OSError."""

    def __init__(self, failures: int = 0) -> None:
        super().__init__()
        self.failures = failures
        self.write_attempts = 0

    def set(self, key: str, value: bytes) -> None:
        self.write_attempts += 1
        if self.failures > 0:
            self.failures -= 1
            raise OSError("disk full")
        super().set(key, value)


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def jan_1() -> pendulum.DateTime:
    return local_day(2025, 1, 1)


def make_task(
    name: str,
    created: pendulum.DateTime,
    deleted: Optional[pendulum.DateTime] = None,
    id: Optional[str] = None,
) -> dict:
    return {
        "id": id if id is not None else name,
        "name": name,
        "completed": False,
        "created": created,
        "deleted": deleted,
    }
