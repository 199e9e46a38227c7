from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Dict, Iterable, List, Tuple

from lent.constants import MONTH_TO_NUMBER
from lent.dates import utc_day_key
from lent.models import GuideEvent

logger = logging.getLogger(__name__)

LABEL_PATTERN = re.compile(r"^(\w+)\s+(\d+)")

LENT_GUIDE_EVENTS = (
    GuideEvent(
        "March 5",
        "Ash Wednesday",
        "Attend an Ash Wednesday service to receive ashes on your forehead, symbolizing repentance "
        "and mortality. Reflect on areas in your life needing growth and set a personal intention for Lent.",
    ),
    GuideEvent(
        "March 6",
        "Silent Prayer",
        "Dedicate 20 minutes to silent prayer or meditation. Find a quiet space, focus on your breathing, "
        "and invite God's presence. Consider using a guided prayer resource if needed.",
    ),
    GuideEvent(
        "March 7",
        "Stations of the Cross",
        "Participate in the Stations of the Cross at your local parish. Reflect on each station, "
        "contemplating Jesus' journey to the crucifixion and its significance in your life.",
    ),
    GuideEvent(
        "March 8",
        "Group Discussion",
        "Organize a group discussion with friends or family about the significance of Lent. "
        "Share personal goals and support each other in your spiritual journeys.",
    ),
    GuideEvent(
        "March 9",
        "Meatless Meal",
        "Prepare and share a simple, meatless meal with loved ones. Use this time to discuss "
        "the importance of fasting and how it brings you closer to God.",
    ),
    GuideEvent(
        "March 10",
        "Social Media Fast",
        "Commit to a day without social media. Use the time to read a passage from the Bible, "
        "perhaps starting with the Gospels, and reflect on its message.",
    ),
    GuideEvent(
        "March 11",
        "Charitable Act",
        "Engage in a charitable act, such as volunteering at a local shelter or donating to a food bank. "
        "Reflect on how acts of service embody Christ's love.",
    ),
    GuideEvent(
        "April 12",
        "Preparation for Holy Week",
        "Prepare for Holy Week by setting aside time for personal prayer and reflection. Consider creating "
        "a sacred space in your home with symbols of the Passion, such as a crucifix or candles, "
        "to enhance your prayer experience.",
    ),
)


def parse_label(label: str) -> Tuple[int, int] | None:
    match = LABEL_PATTERN.match(str(label or "").strip())
    if not match:
        return None
    month = MONTH_TO_NUMBER.get(match.group(1))
    if month is None:
        return None
    return month, int(match.group(2))


def _key_for(value) -> Tuple[int, int] | None:
    if isinstance(value, str):
        return parse_label(value)
    if isinstance(value, datetime):
        _, month, day = utc_day_key(value)
        return month, day
    if isinstance(value, date):
        return value.month, value.day
    return None


class GuideEventIndex:
    def __init__(self, events: Iterable[GuideEvent] = LENT_GUIDE_EVENTS):
        self._by_key: Dict[Tuple[int, int], List[GuideEvent]] = {}
        for event in events:
            key = parse_label(event.month_day)
            if key is None:
                logger.debug("Skipping guide event with unparseable label %r", event.month_day)
                continue
            self._by_key.setdefault(key, []).append(event)

    def lookup(self, value) -> Tuple[GuideEvent, ...]:
        key = _key_for(value)
        if key is None:
            return ()
        return tuple(self._by_key.get(key, ()))

    def first(self, value) -> GuideEvent | None:
        matches = self.lookup(value)
        return matches[0] if matches else None

    def __len__(self) -> int:
        return sum(len(items) for items in self._by_key.values())


DEFAULT_INDEX = GuideEventIndex()


def lookup(value) -> Tuple[GuideEvent, ...]:
    return DEFAULT_INDEX.lookup(value)
