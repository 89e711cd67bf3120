"""Resolve CloudWatch alarm status for tagged AWS resources."""

from __future__ import annotations

from .core import CloudWatchAlarms, get_alarms_with_tags, print_alarm_statuses
from .errors import (
    AlarmStatusError,
    ArnParseError,
    DescribeError,
    MalformedResourceIdentifier,
    QueryConstructionError,
    SearchError,
)
from .models import AlarmStatus, CompositeAlarm, MetricAlarm, RawAlarm

__all__ = [
    "AlarmStatus",
    "AlarmStatusError",
    "ArnParseError",
    "CloudWatchAlarms",
    "CompositeAlarm",
    "DescribeError",
    "MalformedResourceIdentifier",
    "MetricAlarm",
    "QueryConstructionError",
    "RawAlarm",
    "SearchError",
    "get_alarms_with_tags",
    "print_alarm_statuses",
]
