# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

import pendulum

from yizhi import configuration, time
from yizhi.model.entity_id import EntityId
from yizhi.model.task import Task
from yizhi.repository.blob_store import (
    BlobStore,
    BlobWriteError,
    CorruptBlobError,
    decode_json_blob,
    encode_json_blob,
    quarantine_corrupt_blob,
    write_blob,
)

logger = logging.getLogger(__name__)


class TaskRepository:
    """The global task registry, stored as one JSON object under the "tasks" key."""

    def __init__(self, store: BlobStore, retry_failed_writes: bool = True) -> None:
        self._store = store
        self._retry_failed_writes = retry_failed_writes
        self._tasks: Optional[dict[EntityId, Task]] = None
        self.is_dirty = False

    @property
    def tasks(self) -> dict[EntityId, Task]:
        if self._tasks is None:
            self.__load_data()
        if self._tasks is None:
            raise ValueError()
        return self._tasks

    def __load_data(self) -> None:
        key = configuration.TASKS_KEY
        blob = self._store.get(key)
        if blob is None:
            logger.debug("no '%s' blob yet, starting with an empty registry", key)
            self._tasks = {}
            return

        try:
            raw_tasks = decode_json_blob(key, blob)
            self._tasks = self.__convert_tasks_for_deserialization(raw_tasks)
        except CorruptBlobError as e:
            logger.error("%s; starting with an empty registry", e)
            quarantine_corrupt_blob(self._store, key, blob)
            self._tasks = {}

    def __save_data(self) -> None:
        serializable_tasks = {
            id: self.__convert_task_for_serialization(deepcopy(task))
            for id, task in self.tasks.items()
        }
        write_blob(
            self._store,
            configuration.TASKS_KEY,
            encode_json_blob(serializable_tasks),
            retry=self._retry_failed_writes,
        )

    def flush(self) -> bool:
        """
        Write the registry if it changed.

        Raises:
            BlobWriteError: If the store rejected the write; the registry stays dirty
        """
        if self._tasks is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_task_for_serialization(self, task: Task) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], task)
        serializable_task["created"] = time.datetime_to_iso_str(
            serializable_task["created"]
        )
        serializable_task["deleted"] = time.datetime_to_iso_str_optional(
            serializable_task["deleted"]
        )
        return serializable_task

    def __convert_tasks_for_deserialization(
        self, raw_tasks: Any
    ) -> dict[EntityId, Task]:
        key = configuration.TASKS_KEY
        if not isinstance(raw_tasks, dict):
            raise CorruptBlobError(key, "expected an object of tasks")

        tasks: dict[EntityId, Task] = {}
        for id, raw_task in raw_tasks.items():
            try:
                tasks[id] = self.__convert_task_for_deserialization(id, raw_task)
            except (KeyError, TypeError, ValueError) as e:
                raise CorruptBlobError(key, f"task {id}: {e!r}") from e
        return tasks

    def __convert_task_for_deserialization(self, id: str, task: Any) -> Task:
        if not isinstance(task, dict):
            raise TypeError("task is not an object")
        if not isinstance(task["name"], str):
            raise TypeError("name is not a string")
        return {
            "id": id,
            "name": task["name"],
            "completed": bool(task.get("completed", False)),
            "created": time.datetime_from_str(task["created"]),
            "deleted": time.datetime_from_str_optional(task.get("deleted")),
        }

    def save_new_task(self, task: Task) -> EntityId:
        self.is_dirty = True

        self.tasks[task["id"]] = task

        return task["id"]

    def modify_task(
        self,
        id: EntityId,
        name: Optional[str] = None,
        deleted: Optional[pendulum.DateTime] = None,
        remove_deleted: bool = False,
    ) -> None:
        self.is_dirty = True

        task = self.tasks[id]
        if name is not None:
            task["name"] = name
        if deleted is not None:
            task["deleted"] = deleted

        if remove_deleted:
            task["deleted"] = None

    def clear(self) -> None:
        """
        Forget every task and remove the stored blob.

        Raises:
            BlobWriteError: If the stored blob could not be removed
        """
        self._tasks = {}
        self.is_dirty = False
        try:
            self._store.delete(configuration.TASKS_KEY)
        except OSError as e:
            raise BlobWriteError(configuration.TASKS_KEY, e) from e

    def has_task(self, id: EntityId) -> bool:
        return id in self.tasks

    def get_all_tasks(self) -> list[Task]:
        return deepcopy(list(self.tasks.values()))

    def get_task(self, id: EntityId) -> Optional[Task]:
        task = self.tasks.get(id)
        if task is None:
            return None
        return deepcopy(task)
