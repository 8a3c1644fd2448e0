# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

import pendulum

from yizhi import configuration, time
from yizhi.model.completion import CompletionRecord, DailySnapshot, SnapshotStore
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

DICTIONARY_FIELD = "dictionary"


class SnapshotRepository:
    """
    Per-day completion records, stored under the "data" key as
    {"dictionary": {"DD-MM-YYYY": {task_id: record}}}.

    Days are held as integer ordinals in memory and only formatted as date
    keys when reading or writing the blob.
    """

    def __init__(self, store: BlobStore, retry_failed_writes: bool = True) -> None:
        self._store = store
        self._retry_failed_writes = retry_failed_writes
        self._snapshots: Optional[SnapshotStore] = None
        self.is_dirty = False

    @property
    def snapshots(self) -> SnapshotStore:
        if self._snapshots is None:
            self.__load_data()
        if self._snapshots is None:
            raise ValueError()
        return self._snapshots

    def __load_data(self) -> None:
        key = configuration.DATA_KEY
        blob = self._store.get(key)
        if blob is None:
            logger.debug("no '%s' blob yet, starting with no completions", key)
            self._snapshots = {}
            return

        try:
            raw_data = decode_json_blob(key, blob)
            self._snapshots = self.__convert_snapshots_for_deserialization(raw_data)
        except CorruptBlobError as e:
            logger.error("%s; starting with no completions", e)
            quarantine_corrupt_blob(self._store, key, blob)
            self._snapshots = {}

    def __save_data(self) -> None:
        dictionary = {
            time.ordinal_to_date_key(ordinal): {
                id: self.__convert_record_for_serialization(deepcopy(record))
                for id, record in snapshot.items()
            }
            for ordinal, snapshot in sorted(self.snapshots.items())
        }
        write_blob(
            self._store,
            configuration.DATA_KEY,
            encode_json_blob({DICTIONARY_FIELD: dictionary}),
            retry=self._retry_failed_writes,
        )

    def flush(self) -> bool:
        """
        Write the snapshots if they changed.

        Raises:
            BlobWriteError: If the store rejected the write; the store stays dirty
        """
        if self._snapshots is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_record_for_serialization(
        self, record: CompletionRecord
    ) -> dict[str, Any]:
        serializable_record = cast(dict[str, Any], record)
        serializable_record["created"] = time.datetime_to_iso_str(
            serializable_record["created"]
        )
        serializable_record["deleted"] = time.datetime_to_iso_str_optional(
            serializable_record["deleted"]
        )
        return serializable_record

    def __convert_snapshots_for_deserialization(self, raw_data: Any) -> SnapshotStore:
        key = configuration.DATA_KEY
        if not isinstance(raw_data, dict) or not isinstance(
            raw_data.get(DICTIONARY_FIELD), dict
        ):
            raise CorruptBlobError(key, f"expected an object with a '{DICTIONARY_FIELD}'")

        snapshots: SnapshotStore = {}
        for date_key, raw_snapshot in raw_data[DICTIONARY_FIELD].items():
            try:
                ordinal = time.ordinal_from_date_key(date_key)
                if not isinstance(raw_snapshot, dict):
                    raise TypeError("snapshot is not an object")
                snapshots[ordinal] = {
                    id: self.__convert_record_for_deserialization(id, raw_record)
                    for id, raw_record in raw_snapshot.items()
                }
            except (KeyError, TypeError, ValueError) as e:
                raise CorruptBlobError(key, f"day {date_key}: {e!r}") from e
        return snapshots

    def __convert_record_for_deserialization(
        self, id: str, record: Any
    ) -> CompletionRecord:
        if not isinstance(record, dict):
            raise TypeError("record is not an object")
        if not isinstance(record["completed"], bool):
            raise TypeError("completed is not a boolean")
        return {
            "completed": record["completed"],
            "id": record.get("id", id),
            "name": str(record.get("name", "")),
            "created": time.datetime_from_str(record["created"]),
            "deleted": time.datetime_from_str_optional(record.get("deleted")),
        }

    def toggle_completion(self, task: Task, day: pendulum.DateTime) -> bool:
        """
        Flip the task's completion for the day, creating the record on first use.

        Returns:
            The completion state after the toggle
        """
        self.is_dirty = True

        snapshot = self.snapshots.setdefault(time.day_to_ordinal(day), {})
        record = snapshot.get(task["id"])
        if record is None:
            record = {
                "completed": False,
                "id": task["id"],
                "name": task["name"],
                "created": task["created"],
                "deleted": task["deleted"],
            }
            snapshot[task["id"]] = record

        record["completed"] = not record["completed"]
        return record["completed"]

    def is_completed(self, id: EntityId, day: pendulum.DateTime) -> bool:
        snapshot = self.snapshots.get(time.day_to_ordinal(day), {})
        record = snapshot.get(id)
        return record is not None and record["completed"]

    def clear(self) -> None:
        """
        Forget every snapshot and remove the stored blob.

        Raises:
            BlobWriteError: If the stored blob could not be removed
        """
        self._snapshots = {}
        self.is_dirty = False
        try:
            self._store.delete(configuration.DATA_KEY)
        except OSError as e:
            raise BlobWriteError(configuration.DATA_KEY, e) from e

    def get_snapshot(self, day: pendulum.DateTime) -> DailySnapshot:
        return deepcopy(self.snapshots.get(time.day_to_ordinal(day), {}))

    def get_all_snapshots(self) -> SnapshotStore:
        return deepcopy(self.snapshots)
