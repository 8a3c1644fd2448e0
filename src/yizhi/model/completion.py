# SPDX-License-Identifier: MIT

from typing import Optional, TypeAlias, TypedDict

import pendulum

from yizhi.model.entity_id import EntityId


class CompletionRecord(TypedDict):
    completed: bool

    # Denormalized from the task when the record was first written
    id: EntityId
    name: str
    created: pendulum.DateTime
    deleted: Optional[pendulum.DateTime]


DailySnapshot: TypeAlias = dict[EntityId, CompletionRecord]

# Keyed by day ordinal (datetime.date.toordinal)
SnapshotStore: TypeAlias = dict[int, DailySnapshot]
