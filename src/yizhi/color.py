# SPDX-License-Identifier: MIT

COMPLETED_TASK_COLOR = "bright_black"
DELETED_TASK_COLOR = "red"
TODAY_STYLE = "reverse"

# Heat-map colors by intensity level, index 0 is a tracked day with nothing done
INTENSITY_COLORS = [
    "grey50",
    "dark_green",
    "green4",
    "green3",
    "bright_green",
]
