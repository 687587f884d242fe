from datetime import datetime, timedelta, timezone

import pytest
from botocore.exceptions import ClientError

from awswrap.cloudwatch.client import CloudWatchClient
from awswrap.cloudwatch.models import (
    ComparisonOperator,
    Dimension,
    HistoryItemType,
    MetricDatum,
    StandardUnit,
    StateValue,
    Statistic,
)
from awswrap.core.config import AWSSettings
from awswrap.core.errors import CloudWatchError, ValidationError


def _datum(value: float, name: str = "Latency") -> MetricDatum:
    return MetricDatum(
        metric_name=name,
        value=value,
        unit=StandardUnit.MILLISECONDS,
        dimensions=[Dimension(name="Service", value="api")],
    )


class TestAlarms:
    async def test_put_and_describe_alarm(self, cloudwatch):
        await cloudwatch.put_metric_alarm(
            "cpu-high",
            "CPUUtilization",
            "AWS/EC2",
            Statistic.AVERAGE,
            60,
            2,
            80.0,
            ComparisonOperator.GREATER_THAN_THRESHOLD,
            alarm_description="CPU above 80%",
            dimensions=[Dimension(name="InstanceId", value="i-123")],
        )

        result = await cloudwatch.describe_alarms(alarm_names=["cpu-high"])

        alarm = result.metric_alarms[0]
        assert alarm.alarm_name == "cpu-high"
        assert alarm.statistic == Statistic.AVERAGE
        assert alarm.threshold == 80.0
        assert alarm.dimensions == [Dimension(name="InstanceId", value="i-123")]

    async def test_describe_alarms_by_prefix(self, cloudwatch, put_alarm):
        put_alarm("web-cpu")
        put_alarm("web-disk")
        put_alarm("db-cpu")

        result = await cloudwatch.describe_alarms(alarm_name_prefix="web-")

        assert sorted(a.alarm_name for a in result.metric_alarms) == ["web-cpu", "web-disk"]

    async def test_names_and_prefix_are_exclusive(self, dummy_adapter):
        client = CloudWatchClient(adapter=dummy_adapter())

        with pytest.raises(ValidationError):
            await client.describe_alarms(alarm_names=["a"], alarm_name_prefix="a")

    async def test_delete_alarms(self, cloudwatch, put_alarm):
        put_alarm("one")
        put_alarm("two")

        await cloudwatch.delete_alarms("one", "two")

        result = await cloudwatch.describe_alarms()
        assert result.metric_alarms == []

    async def test_set_alarm_state(self, cloudwatch, put_alarm):
        put_alarm("cpu-high")

        await cloudwatch.set_alarm_state("cpu-high", "testing", StateValue.ALARM)

        result = await cloudwatch.describe_alarms(state_value=StateValue.ALARM)
        assert [a.alarm_name for a in result.metric_alarms] == ["cpu-high"]

    async def test_alarm_actions_toggle(self, dummy_adapter):
        adapter = dummy_adapter()
        client = CloudWatchClient(adapter=adapter)

        await client.disable_alarm_actions("a", "b")
        await client.enable_alarm_actions("a")

        assert adapter.calls == [
            ("disable_alarm_actions", {"AlarmNames": ["a", "b"]}),
            ("enable_alarm_actions", {"AlarmNames": ["a"]}),
        ]

    async def test_describe_alarms_for_metric(self, dummy_adapter):
        adapter = dummy_adapter(
            responses={
                "describe_alarms_for_metric": {
                    "MetricAlarms": [{"AlarmName": "cpu-high", "StateValue": "OK"}]
                }
            }
        )
        client = CloudWatchClient(adapter=adapter)

        result = await client.describe_alarms_for_metric(
            "CPUUtilization", "AWS/EC2", statistic=Statistic.MAXIMUM
        )

        assert result.metric_alarms[0].state_value == StateValue.OK
        assert adapter.calls[0][1] == {
            "MetricName": "CPUUtilization",
            "Namespace": "AWS/EC2",
            "Statistic": "Maximum",
        }

    async def test_describe_alarm_history(self, dummy_adapter):
        adapter = dummy_adapter(
            responses={
                "describe_alarm_history": {
                    "AlarmHistoryItems": [
                        {
                            "AlarmName": "cpu-high",
                            "HistoryItemType": "StateUpdate",
                            "HistorySummary": "Alarm updated from OK to ALARM",
                        }
                    ],
                    "NextToken": "next",
                }
            }
        )
        client = CloudWatchClient(adapter=adapter)

        result = await client.describe_alarm_history(
            alarm_name="cpu-high", history_item_type=HistoryItemType.STATE_UPDATE
        )

        assert result.next_token == "next"
        assert result.alarm_history_items[0].history_summary.startswith("Alarm updated")
        assert adapter.calls[0][1] == {"AlarmName": "cpu-high", "HistoryItemType": "StateUpdate"}

    async def test_client_error_is_translated(self, dummy_adapter):
        error = ClientError(
            {"Error": {"Code": "LimitExceeded", "Message": "Too many alarms"}},
            "PutMetricAlarm",
        )
        client = CloudWatchClient(adapter=dummy_adapter(error=error))

        with pytest.raises(CloudWatchError) as exc:
            await client.delete_alarms("a")

        assert exc.value.error_code == "LimitExceeded"
        assert exc.value.details["aws_message"] == "Too many alarms"


class TestMetrics:
    async def test_put_metric_data_and_list_metrics(self, cloudwatch):
        await cloudwatch.put_metric_data("awswrap/tests", [_datum(12.0), _datum(15.0)])

        result = await cloudwatch.list_metrics(namespace="awswrap/tests")

        assert {m.metric_name for m in result.metrics} == {"Latency"}
        assert result.metrics[0].dimensions == [Dimension(name="Service", value="api")]

    async def test_put_metric_data_batches_by_twenty(self, dummy_adapter):
        adapter = dummy_adapter()
        client = CloudWatchClient(adapter=adapter)

        await client.put_metric_data("ns", [_datum(float(i)) for i in range(45)])

        assert [len(kwargs["MetricData"]) for _, kwargs in adapter.calls] == [20, 20, 5]
        assert all(kwargs["Namespace"] == "ns" for _, kwargs in adapter.calls)

    async def test_put_metric_data_empty_is_noop(self, dummy_adapter):
        adapter = dummy_adapter()
        client = CloudWatchClient(adapter=adapter)

        await client.put_metric_data("ns", [])

        assert adapter.calls == []

    async def test_get_metric_statistics(self, cloudwatch):
        now = datetime.now(timezone.utc)
        await cloudwatch.put_metric_data(
            "awswrap/tests",
            [
                MetricDatum(metric_name="Requests", value=v, timestamp=now)
                for v in (1.0, 2.0, 3.0)
            ],
        )

        result = await cloudwatch.get_metric_statistics(
            "awswrap/tests",
            "Requests",
            [Statistic.SUM, Statistic.MAXIMUM],
            start_time=now - timedelta(minutes=5),
            end_time=now + timedelta(minutes=5),
        )

        assert result.label == "Requests"
        assert sum(d.sum for d in result.datapoints) == 6.0
        assert max(d.maximum for d in result.datapoints) == 3.0

    async def test_get_metric_statistics_defaults_to_last_hour(self, dummy_adapter):
        adapter = dummy_adapter()
        client = CloudWatchClient(adapter=adapter)

        await client.get_metric_statistics("ns", "m", [Statistic.AVERAGE])

        params = adapter.calls[0][1]
        assert params["EndTime"] - params["StartTime"] == timedelta(hours=1)
        assert params["Period"] == 60
        assert params["Statistics"] == ["Average"]

    async def test_get_metric_statistics_requires_statistics(self, dummy_adapter):
        client = CloudWatchClient(adapter=dummy_adapter())

        with pytest.raises(ValidationError):
            await client.get_metric_statistics("ns", "m", [])


class TestLifecycle:
    async def test_async_context_closes_owned_executor(self, dummy_adapter):
        client = CloudWatchClient(settings=AWSSettings(max_workers=2), adapter=dummy_adapter())

        async with client as cw:
            await cw.enable_alarm_actions("a")
            assert cw._executor is not None

        assert client._executor is None
