"""
Typed reminder settings of a completion progress block.

All defaulting and coercion of the loosely-typed block configuration
happens here, once, when the blob is decoded.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from django.db import models

DAY_SECONDS = 86400


class ReminderFrequency(models.TextChoices):
    NONE = 'none', 'Never throttle'
    DAILY = 'daily', 'Daily'
    WEEKLY = 'weekly', 'Weekly'
    MONTHLY = 'monthly', 'Monthly'
    YEARLY = 'yearly', 'Yearly'


class ActivitiesIncluded(models.TextChoices):
    ALL = 'activitycompletion', 'All activities with completion'
    SELECTED = 'selectedactivities', 'Selected activities'


FREQUENCY_INTERVALS = {
    ReminderFrequency.DAILY: DAY_SECONDS,
    ReminderFrequency.WEEKLY: 7 * DAY_SECONDS,
    ReminderFrequency.MONTHLY: 30 * DAY_SECONDS,
    ReminderFrequency.YEARLY: 365 * DAY_SECONDS,
}

DEFAULT_FREQUENCY = ReminderFrequency.WEEKLY.value
DEFAULT_THRESHOLD = 50
NO_GROUP_FILTER = '0'

# Keys in the block configuration blob
KEY_ENABLED = 'reminder_enabled'
KEY_FREQUENCY = 'reminder_frequency'
KEY_THRESHOLD = 'reminder_threshold'
KEY_LAST_SENT = 'reminder_last_sent'
KEY_GROUP = 'group'
KEY_ACTIVITIES_INCLUDED = 'activities_included'
KEY_SELECTED_ACTIVITIES = 'selected_activities'

TRUE_STRINGS = {'1', 'true', 'yes', 'on'}


def interval_for(frequency) -> int:
    """Seconds between reminder batches for a frequency; 0 means no throttle."""
    return FREQUENCY_INTERVALS.get(frequency, 0)


def clamp_threshold(value) -> int:
    return max(0, min(100, value))


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def _to_int(value, default=None):
    if isinstance(value, bool):
        return int(value)
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def _to_id_list(value) -> List[int]:
    if not isinstance(value, (list, tuple)):
        return []
    ids = []
    for item in value:
        item_id = _to_int(item)
        if item_id is not None and item_id > 0:
            ids.append(item_id)
    return ids


@dataclass
class ReminderConfig:
    """
    Reminder settings decoded from a block configuration dict.

    last_sent_at is a unix timestamp, None when reminders never went out.
    """

    enabled: bool = False
    frequency: str = DEFAULT_FREQUENCY
    threshold: int = DEFAULT_THRESHOLD
    last_sent_at: Optional[int] = None
    group_filter: str = NO_GROUP_FILTER
    activities_included: str = ActivitiesIncluded.ALL.value
    selected_activities: List[int] = field(default_factory=list)

    @classmethod
    def from_block_config(cls, data: Dict[str, Any]) -> 'ReminderConfig':
        """Build a config from a decoded blob, applying defaults to missing or bad values."""
        frequency = data.get(KEY_FREQUENCY)
        if frequency is None or str(frequency).strip() == '':
            frequency = DEFAULT_FREQUENCY
        frequency = str(frequency).strip().lower()

        threshold = _to_int(data.get(KEY_THRESHOLD), DEFAULT_THRESHOLD)

        last_sent_at = _to_int(data.get(KEY_LAST_SENT))
        if last_sent_at is not None and last_sent_at <= 0:
            last_sent_at = None

        group_filter = data.get(KEY_GROUP)
        group_filter = NO_GROUP_FILTER if group_filter is None else str(group_filter).strip()

        activities_included = str(data.get(KEY_ACTIVITIES_INCLUDED) or ActivitiesIncluded.ALL).strip()
        if activities_included not in ActivitiesIncluded.values:
            activities_included = ActivitiesIncluded.ALL.value

        return cls(
            enabled=_to_bool(data.get(KEY_ENABLED, False)),
            frequency=frequency,
            threshold=clamp_threshold(threshold),
            last_sent_at=last_sent_at,
            group_filter=group_filter,
            activities_included=activities_included,
            selected_activities=_to_id_list(data.get(KEY_SELECTED_ACTIVITIES)),
        )

    @property
    def interval(self) -> int:
        return interval_for(self.frequency)

    def throttle_remaining(self, now_ts: int) -> int:
        """Seconds left before another batch may go out (0 when allowed now)."""
        if self.interval <= 0 or self.last_sent_at is None:
            return 0
        elapsed = now_ts - self.last_sent_at
        if elapsed >= self.interval:
            return 0
        return self.interval - elapsed

    def is_throttled(self, now_ts: int) -> bool:
        return self.throttle_remaining(now_ts) > 0

    def selected_activity_ids(self) -> Optional[List[int]]:
        """Activity ids to track, or None for every completion-tracked activity."""
        if self.activities_included == ActivitiesIncluded.SELECTED:
            return list(self.selected_activities)
        return None

    def with_last_sent(self, data: Dict[str, Any], now_ts: int) -> Dict[str, Any]:
        """Return a copy of the blob dict with the last-sent stamp replaced; other keys are kept."""
        updated = dict(data)
        updated[KEY_LAST_SENT] = now_ts
        self.last_sent_at = now_ts
        return updated
