from datetime import timedelta

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
MONTH_TO_NUMBER = {name: idx for idx, name in enumerate(MONTH_NAMES, start=1)}

PALETTE = [
    "#F87171",
    "#60A5FA",
    "#34D399",
    "#A78BFA",
    "#FBBF24",
    "#F472B6",
    "#38BDF8",
]

WIDE_COLUMNS = 7
NARROW_COLUMNS = 2
NARROW_VIEWPORT_WIDTH = 768

DEFAULT_CELL_HEIGHT = 48.0
DAY_CELL_MARGIN = 4.0

STORAGE_DAY_SHIFT = timedelta(days=1)

NOTIFICATION_SECONDS = 3.0
