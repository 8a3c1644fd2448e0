# SPDX-License-Identifier: MIT

import pendulum

from yizhi.model.entity_id import generate_entity_id
from yizhi.model.task import Task
from yizhi.time import start_of_day


def get_task_template(name: str, day: pendulum.DateTime) -> Task:
    return {
        "id": generate_entity_id(),
        "name": name,
        "completed": False,
        "created": start_of_day(day),
        "deleted": None,
    }
