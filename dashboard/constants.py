from lent.constants import MONTH_NAMES, WEEKDAY_LABELS

SCREEN_STATE_KEY = "lent.screen"

MODE_LABELS = {
    "grid": "Calendar View",
    "list": "List View",
}
LABEL_TO_MODE = {label: mode for mode, label in MODE_LABELS.items()}

VIEWPORT_LABELS = {
    "wide": "Full week grid",
    "narrow": "Compact (2 columns)",
}

FILTER_LABELS = {
    "all": "All tasks",
    "friends": "Friends only",
}

SELF_TASK_COLOR = "#FEF08A"

__all__ = [
    "MONTH_NAMES",
    "WEEKDAY_LABELS",
    "SCREEN_STATE_KEY",
    "MODE_LABELS",
    "LABEL_TO_MODE",
    "VIEWPORT_LABELS",
    "FILTER_LABELS",
    "SELF_TASK_COLOR",
]
