"""Data models for CloudWatch alarms and their normalised status."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from .utils import to_unix_seconds

COMPOSITE_ALARM_TYPE = "Composite"
METRIC_ALARM_TYPE = "Metric"


@dataclass(frozen=True)
class AlarmStatus:
    """Current state of one CloudWatch alarm, independent of its kind."""

    arn: str
    name: str
    reason: str
    status: str
    type: str
    updated_times: int

    def as_dict(self) -> Dict[str, Any]:
        """Return the record using the CloudWatch-style key names."""

        return {
            "Arn": self.arn,
            "Name": self.name,
            "Reason": self.reason,
            "Status": self.status,
            "Type": self.type,
            "UpdatedTimes": self.updated_times,
        }


@dataclass(frozen=True)
class RawAlarm:
    """Alarm as returned by ``DescribeAlarms``; subclassed per alarm kind."""

    arn: str = ""
    name: str = ""
    state_value: str = ""
    state_reason: str = ""
    state_updated: Optional[datetime] = None

    @classmethod
    def from_response(cls, item: Mapping[str, Any]) -> "RawAlarm":
        return cls(
            arn=item.get("AlarmArn") or "",
            name=item.get("AlarmName") or "",
            state_value=item.get("StateValue") or "",
            state_reason=item.get("StateReason") or "",
            state_updated=item.get("StateUpdatedTimestamp"),
        )


@dataclass(frozen=True)
class CompositeAlarm(RawAlarm):
    """An alarm whose state is derived from a rule over other alarms."""


@dataclass(frozen=True)
class MetricAlarm(RawAlarm):
    """An alarm that watches a single metric or metric math expression."""


@dataclass
class SearchPage:
    """One page of ``SearchResources`` results."""

    resource_arns: List[str] = field(default_factory=list)
    next_token: Optional[str] = None


@dataclass
class DescribePage:
    """One page of ``DescribeAlarms`` results, split by alarm kind."""

    composite_alarms: List[CompositeAlarm] = field(default_factory=list)
    metric_alarms: List[MetricAlarm] = field(default_factory=list)
    next_token: Optional[str] = None


def normalize_alarm(alarm: RawAlarm, alarm_type: str) -> AlarmStatus:
    """Convert *alarm* into an :class:`AlarmStatus` tagged with *alarm_type*.

    The tag comes from the response list the alarm was read from, not from the
    alarm itself.
    """

    return AlarmStatus(
        arn=alarm.arn,
        name=alarm.name,
        reason=alarm.state_reason,
        status=alarm.state_value,
        type=alarm_type,
        updated_times=to_unix_seconds(alarm.state_updated),
    )


__all__ = [
    "AlarmStatus",
    "COMPOSITE_ALARM_TYPE",
    "CompositeAlarm",
    "DescribePage",
    "METRIC_ALARM_TYPE",
    "MetricAlarm",
    "RawAlarm",
    "SearchPage",
    "normalize_alarm",
]
