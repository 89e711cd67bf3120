"""End-to-end tests for the tag-based alarm lookup."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest
from botocore.exceptions import ClientError

from alarm_status.core import (
    CloudWatchAlarms,
    export_alarm_statuses_to_excel,
    export_alarm_statuses_to_json,
    print_alarm_statuses,
)
from alarm_status.errors import ArnParseError, SearchError
from alarm_status.models import AlarmStatus, DescribePage, MetricAlarm, SearchPage


ARN = "arn:aws:cloudwatch:us-west-2:1234567890:alarm:MyAlarm"
UPDATED = datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc)


def test_get_alarms_with_tags_single_metric_alarm(
    search_client_factory, describe_client_factory
) -> None:
    search = search_client_factory([SearchPage([ARN])])
    describe = describe_client_factory(
        [
            DescribePage(
                metric_alarms=[
                    MetricAlarm(
                        arn=ARN,
                        name="MyAlarm",
                        state_value="OK",
                        state_reason="threshold not breached",
                        state_updated=UPDATED,
                    )
                ]
            )
        ]
    )

    statuses = CloudWatchAlarms(search, describe).get_alarms_with_tags({"env": "test"})

    assert statuses == [
        AlarmStatus(
            arn=ARN,
            name="MyAlarm",
            reason="threshold not breached",
            status="OK",
            type="Metric",
            updated_times=1614834367,
        )
    ]
    assert describe.calls == [(["MyAlarm"], None)]


def test_search_failure_on_second_page_skips_describe(
    search_client_factory, describe_client_factory
) -> None:
    search = search_client_factory(
        [
            SearchPage([ARN], next_token="t1"),
            ClientError({"Error": {"Code": "InternalFailure", "Message": "boom"}}, "SearchResources"),
        ]
    )
    describe = describe_client_factory([])

    with pytest.raises(SearchError):
        CloudWatchAlarms(search, describe).get_alarms_with_tags({"env": "test"})
    assert describe.calls == []


def test_invalid_arn_aborts_lookup(search_client_factory, describe_client_factory) -> None:
    search = search_client_factory([SearchPage([ARN, "bogus"])])
    describe = describe_client_factory([])

    with pytest.raises(ArnParseError) as excinfo:
        CloudWatchAlarms(search, describe).get_alarms_with_tags({})
    assert "bogus" in str(excinfo.value)
    assert describe.calls == []


def test_print_alarm_statuses_without_alarms(capsys) -> None:
    print_alarm_statuses([])

    assert capsys.readouterr().out == "No alarms found.\n"


def test_print_alarm_statuses_renders_rows(capsys) -> None:
    print_alarm_statuses(
        [AlarmStatus(ARN, "MyAlarm", "threshold not breached", "OK", "Metric", 1614834367)]
    )

    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("Name")
    assert "MyAlarm" in out[2]
    assert "2021-03-04T05:06:07Z" in out[2]
    assert out[2].endswith("threshold not breached")


def test_export_alarm_statuses_to_json(tmp_path) -> None:
    path = tmp_path / "alarms.json"
    status = AlarmStatus(ARN, "MyAlarm", "", "ALARM", "Composite", 0)

    export_alarm_statuses_to_json([status], str(path))

    assert json.loads(path.read_text(encoding="utf-8")) == [status.as_dict()]


def test_export_alarm_statuses_to_excel(tmp_path) -> None:
    openpyxl = pytest.importorskip("openpyxl")
    path = tmp_path / "alarms.xlsx"
    status = AlarmStatus(ARN, "MyAlarm", "threshold not breached", "OK", "Metric", 1614834367)

    assert export_alarm_statuses_to_excel([status], str(path)) == str(path)

    rows = list(openpyxl.load_workbook(path)["Alarms"].iter_rows(values_only=True))
    assert rows == [
        ("Name", "Type", "Status", "Last Updated", "Reason", "ARN"),
        ("MyAlarm", "Metric", "OK", "2021-03-04T05:06:07Z", "threshold not breached", ARN),
    ]
