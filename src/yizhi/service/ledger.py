# SPDX-License-Identifier: MIT

import logging
import threading
from typing import Callable, Optional, Protocol

import pendulum

from yizhi import time
from yizhi.model.contribution import (
    ContributionArray,
    ContributionSlot,
    MutationResult,
)
from yizhi.model.entity_id import EntityId
from yizhi.model.task import DayTask, Task
from yizhi.repository.blob_store import BlobStore, BlobWriteError
from yizhi.repository.snapshot import SnapshotRepository
from yizhi.repository.task import TaskRepository
from yizhi.service import contribution
from yizhi.service.visibility import get_available_tasks, is_task_visible
from yizhi.template.task import get_task_template

logger = logging.getLogger(__name__)


class _Flushable(Protocol):
    def flush(self) -> bool: ...


class Ledger:
    """
    Applies day-to-day actions to the task registry and the daily snapshots.

    Every mutation is written through to the blob store straight away and,
    when contribution tracking is on, the returned MutationResult carries the
    recomputed contribution array for the active day's year. All reads and
    writes go through a single lock so the ledger can be shared with a
    rendering thread.
    """

    def __init__(
        self,
        store: BlobStore,
        active_day: Optional[pendulum.DateTime] = None,
        track_contribution: bool = True,
        retry_failed_writes: bool = True,
        clock: Callable[[], pendulum.DateTime] = time.today,
    ) -> None:
        self._task_repo = TaskRepository(store, retry_failed_writes)
        self._snapshot_repo = SnapshotRepository(store, retry_failed_writes)
        self._lock = threading.RLock()
        self._clock = clock
        self.track_contribution = track_contribution
        self._active_day = time.start_of_day(
            active_day if active_day is not None else clock()
        )

    @property
    def active_day(self) -> pendulum.DateTime:
        return self._active_day

    @property
    def active_year(self) -> int:
        return self._active_day.year

    def __day(self, day: Optional[pendulum.DateTime]) -> pendulum.DateTime:
        return time.start_of_day(day) if day is not None else self._active_day

    def __persist(self, *repositories: _Flushable) -> bool:
        persisted = True
        for repository in repositories:
            try:
                repository.flush()
            except BlobWriteError as e:
                logger.error("%s", e)
                persisted = False
        return persisted

    def __result(
        self,
        changed: bool,
        persisted: bool = True,
        task: Optional[Task] = None,
    ) -> MutationResult:
        contribution_array: Optional[ContributionArray] = None
        if changed and self.track_contribution:
            contribution_array = contribution.compute_contribution(
                self._task_repo.get_all_tasks(),
                self._snapshot_repo.snapshots,
                self.active_year,
            )
        return {
            "changed": changed,
            "persisted": persisted,
            "task": task,
            "contribution": contribution_array,
        }

    def add_task(
        self, name: str, day: Optional[pendulum.DateTime] = None
    ) -> MutationResult:
        name = name.strip()
        if not name:
            logger.debug("ignoring task with an empty name")
            return self.__result(False)

        with self._lock:
            task = get_task_template(name, self.__day(day))
            id = self._task_repo.save_new_task(task)
            persisted = self.__persist(self._task_repo)
            return self.__result(True, persisted, self._task_repo.get_task(id))

    def toggle_completion(
        self, task_id: EntityId, day: Optional[pendulum.DateTime] = None
    ) -> MutationResult:
        with self._lock:
            target_day = self.__day(day)
            task = self._task_repo.get_task(task_id)
            if task is None:
                logger.debug("toggle of unknown task %s ignored", task_id)
                return self.__result(False)
            if not is_task_visible(task, target_day):
                logger.debug(
                    "toggle of task %s ignored, not visible on %s",
                    task_id,
                    time.day_to_date_key(target_day),
                )
                return self.__result(False, task=task)

            self._snapshot_repo.toggle_completion(task, target_day)
            persisted = self.__persist(self._snapshot_repo)
            return self.__result(True, persisted, task)

    def rename_task(self, task_id: EntityId, new_name: str) -> MutationResult:
        with self._lock:
            if not self._task_repo.has_task(task_id):
                logger.debug("rename of task %s ignored", task_id)
                return self.__result(False)

            self._task_repo.modify_task(task_id, name=new_name)
            persisted = self.__persist(self._task_repo)
            return self.__result(True, persisted, self._task_repo.get_task(task_id))

    def soft_delete_task(
        self, task_id: EntityId, day: Optional[pendulum.DateTime] = None
    ) -> MutationResult:
        with self._lock:
            task = self._task_repo.get_task(task_id)
            if task is None or task["deleted"] is not None:
                logger.debug("delete of task %s ignored", task_id)
                return self.__result(False, task=task)

            # Never before the creation day
            deleted = max(self.__day(day), time.start_of_day(task["created"]))
            self._task_repo.modify_task(task_id, deleted=deleted)
            persisted = self.__persist(self._task_repo)
            return self.__result(True, persisted, self._task_repo.get_task(task_id))

    def navigate(self, delta_days: int) -> pendulum.DateTime:
        with self._lock:
            self._active_day = time.add_days(self._active_day, delta_days)
            return self._active_day

    def clear_all(self) -> MutationResult:
        with self._lock:
            persisted = True
            for repository in (self._task_repo, self._snapshot_repo):
                try:
                    repository.clear()
                except BlobWriteError as e:
                    logger.error("%s", e)
                    persisted = False
            return self.__result(True, persisted)

    def get_task(self, task_id: EntityId) -> Optional[Task]:
        with self._lock:
            return self._task_repo.get_task(task_id)

    def get_all_tasks(self) -> list[Task]:
        with self._lock:
            return self._task_repo.get_all_tasks()

    def get_visible_tasks(self, day: Optional[pendulum.DateTime] = None) -> list[DayTask]:
        with self._lock:
            target_day = self.__day(day)
            return [
                {
                    "task": task,
                    "completed": self._snapshot_repo.is_completed(task["id"], target_day),
                }
                for task in get_available_tasks(
                    self._task_repo.get_all_tasks(), target_day
                )
            ]

    def get_contribution(self, year: Optional[int] = None) -> ContributionArray:
        with self._lock:
            return contribution.compute_contribution(
                self._task_repo.get_all_tasks(),
                self._snapshot_repo.snapshots,
                year if year is not None else self.active_year,
            )

    def get_contribution_timeline_data(
        self, year: Optional[int] = None
    ) -> list[ContributionSlot]:
        with self._lock:
            return contribution.get_contribution_timeline_data(
                self._task_repo.get_all_tasks(),
                self._snapshot_repo.snapshots,
                year if year is not None else self.active_year,
            )

    def is_today_slot(self, offset: int, year: Optional[int] = None) -> bool:
        return contribution.is_today_slot(
            offset,
            year if year is not None else self.active_year,
            self._clock(),
        )
