"""Asynchronous CloudWatch client for alarms and metrics."""

from collections.abc import Iterable
from concurrent.futures import Executor
from datetime import datetime
from itertools import islice
from types import TracebackType
from typing import Any

from aws_lambda_powertools import Logger

from awswrap.cloudwatch.adapter import CloudWatchAdapter
from awswrap.cloudwatch.models import (
    ComparisonOperator,
    DescribeAlarmHistoryResult,
    DescribeAlarmsForMetricResult,
    DescribeAlarmsResult,
    Dimension,
    GetMetricStatisticsResult,
    HistoryItemType,
    ListMetricsResult,
    MetricDatum,
    StandardUnit,
    StateValue,
    Statistic,
)
from awswrap.core.config import AWSSettings
from awswrap.core.constants import (
    CLOUDWATCH_DEFAULT_PERIOD,
    CLOUDWATCH_DEFAULT_WINDOW_SECONDS,
    CLOUDWATCH_MAX_DATUMS_PER_REQUEST,
)
from awswrap.core.errors import CloudWatchError, ValidationError
from awswrap.core.futures import ExecutorOwner
from awswrap.core.service import ServiceArea
from awswrap.core.time import trailing_window

logger = Logger(UTC=True)


def _compact(**params: Any) -> dict[str, Any]:
    """Drop unset optional parameters; boto3 rejects explicit None."""
    return {k: v for k, v in params.items() if v is not None and v != []}


def _dimensions(dimensions: Iterable[Dimension]) -> list[dict[str, str]]:
    return [d.to_request() for d in dimensions]


def _batches(items: Iterable[MetricDatum], size: int) -> Iterable[list[MetricDatum]]:
    iterator = iter(items)
    while batch := list(islice(iterator, size)):
        yield batch


class CloudWatchClient(ServiceArea, ExecutorOwner):
    """Lightweight async wrapper over the CloudWatch API.

    Void AWS operations resolve to None; the others resolve to typed
    result models.
    """

    service_error = CloudWatchError

    def __init__(
        self,
        settings: AWSSettings | None = None,
        adapter: CloudWatchAdapter | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.settings = settings or AWSSettings.from_env()
        self._init_executor(self.settings, executor)
        super().__init__(adapter or CloudWatchAdapter(settings=self.settings), self._executor)

    @property
    def adapter(self) -> CloudWatchAdapter:
        return self._adapter

    # ------------------------------------------------------------------
    # Alarms
    # ------------------------------------------------------------------

    async def delete_alarms(self, *alarm_names: str) -> None:
        await self._call(
            "DeleteAlarms",
            self._adapter.delete_alarms,
            details={"alarm_names": list(alarm_names)},
            AlarmNames=list(alarm_names),
        )
        logger.info("Alarms deleted", extra={"alarm_names": list(alarm_names)})

    async def describe_alarm_history(
        self,
        alarm_name: str | None = None,
        history_item_type: HistoryItemType | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        max_records: int | None = None,
        next_token: str | None = None,
    ) -> DescribeAlarmHistoryResult:
        response = await self._call(
            "DescribeAlarmHistory",
            self._adapter.describe_alarm_history,
            details={"alarm_name": alarm_name},
            **_compact(
                AlarmName=alarm_name,
                HistoryItemType=history_item_type.value if history_item_type else None,
                StartDate=start_date,
                EndDate=end_date,
                MaxRecords=max_records,
                NextToken=next_token,
            ),
        )
        return DescribeAlarmHistoryResult.model_validate(response)

    async def describe_alarms(
        self,
        alarm_names: Iterable[str] = (),
        alarm_name_prefix: str | None = None,
        state_value: StateValue | None = None,
        action_prefix: str | None = None,
        max_records: int | None = None,
        next_token: str | None = None,
    ) -> DescribeAlarmsResult:
        names = list(alarm_names)
        if names and alarm_name_prefix:
            raise ValidationError(
                message="alarm_names and alarm_name_prefix are mutually exclusive",
                details={"alarm_names": names, "alarm_name_prefix": alarm_name_prefix},
            )

        response = await self._call(
            "DescribeAlarms",
            self._adapter.describe_alarms,
            details={"alarm_names": names, "alarm_name_prefix": alarm_name_prefix},
            **_compact(
                AlarmNames=names,
                AlarmNamePrefix=alarm_name_prefix,
                StateValue=state_value.value if state_value else None,
                ActionPrefix=action_prefix,
                MaxRecords=max_records,
                NextToken=next_token,
            ),
        )
        return DescribeAlarmsResult.model_validate(response)

    async def describe_alarms_for_metric(
        self,
        metric_name: str,
        namespace: str,
        statistic: Statistic | None = None,
        dimensions: Iterable[Dimension] = (),
        period: int | None = None,
        unit: StandardUnit | None = None,
    ) -> DescribeAlarmsForMetricResult:
        response = await self._call(
            "DescribeAlarmsForMetric",
            self._adapter.describe_alarms_for_metric,
            details={"metric_name": metric_name, "namespace": namespace},
            **_compact(
                MetricName=metric_name,
                Namespace=namespace,
                Statistic=statistic.value if statistic else None,
                Dimensions=_dimensions(dimensions),
                Period=period,
                Unit=unit.value if unit else None,
            ),
        )
        return DescribeAlarmsForMetricResult.model_validate(response)

    async def disable_alarm_actions(self, *alarm_names: str) -> None:
        await self._call(
            "DisableAlarmActions",
            self._adapter.disable_alarm_actions,
            details={"alarm_names": list(alarm_names)},
            AlarmNames=list(alarm_names),
        )

    async def enable_alarm_actions(self, *alarm_names: str) -> None:
        await self._call(
            "EnableAlarmActions",
            self._adapter.enable_alarm_actions,
            details={"alarm_names": list(alarm_names)},
            AlarmNames=list(alarm_names),
        )

    async def put_metric_alarm(
        self,
        alarm_name: str,
        metric_name: str,
        namespace: str,
        statistic: Statistic,
        period: int,
        evaluation_periods: int,
        threshold: float,
        comparison_operator: ComparisonOperator,
        *,
        alarm_description: str | None = None,
        actions_enabled: bool | None = None,
        ok_actions: Iterable[str] = (),
        alarm_actions: Iterable[str] = (),
        insufficient_data_actions: Iterable[str] = (),
        dimensions: Iterable[Dimension] = (),
        unit: StandardUnit | None = None,
    ) -> None:
        """Create or update an alarm on a single metric."""
        await self._call(
            "PutMetricAlarm",
            self._adapter.put_metric_alarm,
            details={"alarm_name": alarm_name, "metric_name": metric_name},
            **_compact(
                AlarmName=alarm_name,
                AlarmDescription=alarm_description,
                ActionsEnabled=actions_enabled,
                OKActions=list(ok_actions),
                AlarmActions=list(alarm_actions),
                InsufficientDataActions=list(insufficient_data_actions),
                MetricName=metric_name,
                Namespace=namespace,
                Statistic=statistic.value,
                Dimensions=_dimensions(dimensions),
                Period=period,
                Unit=unit.value if unit else None,
                EvaluationPeriods=evaluation_periods,
                Threshold=threshold,
                ComparisonOperator=comparison_operator.value,
            ),
        )
        logger.info("Metric alarm stored", extra={"alarm_name": alarm_name})

    async def set_alarm_state(
        self,
        alarm_name: str,
        state_reason: str,
        state_value: StateValue,
        state_reason_data: str = "",
    ) -> None:
        """Temporarily force an alarm into a state; the next evaluation resets it."""
        await self._call(
            "SetAlarmState",
            self._adapter.set_alarm_state,
            details={"alarm_name": alarm_name, "state_value": state_value.value},
            **_compact(
                AlarmName=alarm_name,
                StateValue=state_value.value,
                StateReason=state_reason,
                StateReasonData=state_reason_data or None,
            ),
        )

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    async def get_metric_statistics(
        self,
        namespace: str,
        metric_name: str,
        statistics: Iterable[Statistic],
        period: int = CLOUDWATCH_DEFAULT_PERIOD,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        dimensions: Iterable[Dimension] = (),
        unit: StandardUnit | None = None,
    ) -> GetMetricStatisticsResult:
        """Fetch aggregated datapoints; the window defaults to the last hour."""
        stats = [s.value for s in statistics]
        if not stats:
            raise ValidationError(
                message="At least one statistic is required",
                details={"namespace": namespace, "metric_name": metric_name},
            )

        if start_time is None or end_time is None:
            default_start, default_end = trailing_window(
                CLOUDWATCH_DEFAULT_WINDOW_SECONDS, end=end_time
            )
            start_time = start_time or default_start
            end_time = end_time or default_end

        response = await self._call(
            "GetMetricStatistics",
            self._adapter.get_metric_statistics,
            details={"namespace": namespace, "metric_name": metric_name},
            **_compact(
                Namespace=namespace,
                MetricName=metric_name,
                Dimensions=_dimensions(dimensions),
                StartTime=start_time,
                EndTime=end_time,
                Period=period,
                Statistics=stats,
                Unit=unit.value if unit else None,
            ),
        )
        return GetMetricStatisticsResult.model_validate(response)

    async def list_metrics(
        self,
        namespace: str | None = None,
        metric_name: str | None = None,
        dimensions: Iterable[Dimension] = (),
        next_token: str | None = None,
    ) -> ListMetricsResult:
        response = await self._call(
            "ListMetrics",
            self._adapter.list_metrics,
            details={"namespace": namespace, "metric_name": metric_name},
            **_compact(
                Namespace=namespace,
                MetricName=metric_name,
                Dimensions=_dimensions(dimensions),
                NextToken=next_token,
            ),
        )
        return ListMetricsResult.model_validate(response)

    async def put_metric_data(self, namespace: str, metric_data: Iterable[MetricDatum]) -> None:
        """Publish datums, split into requests of at most 20."""
        sent = 0
        for batch in _batches(metric_data, CLOUDWATCH_MAX_DATUMS_PER_REQUEST):
            await self._call(
                "PutMetricData",
                self._adapter.put_metric_data,
                details={"namespace": namespace, "count": len(batch)},
                Namespace=namespace,
                MetricData=[d.to_request() for d in batch],
            )
            sent += len(batch)

        if sent:
            logger.info("Metric data published", extra={"namespace": namespace, "count": sent})

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Shut down the executor if this client created it."""
        self._shutdown_executor()

    async def __aenter__(self) -> "CloudWatchClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
