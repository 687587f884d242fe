"""Pydantic models for CloudWatch requests and results."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr

_AWS_SHAPE = ConfigDict(populate_by_name=True, extra="ignore")


class StateValue(StrEnum):
    OK = "OK"
    ALARM = "ALARM"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"


class Statistic(StrEnum):
    SAMPLE_COUNT = "SampleCount"
    AVERAGE = "Average"
    SUM = "Sum"
    MINIMUM = "Minimum"
    MAXIMUM = "Maximum"


class ComparisonOperator(StrEnum):
    GREATER_THAN_OR_EQUAL_TO_THRESHOLD = "GreaterThanOrEqualToThreshold"
    GREATER_THAN_THRESHOLD = "GreaterThanThreshold"
    LESS_THAN_THRESHOLD = "LessThanThreshold"
    LESS_THAN_OR_EQUAL_TO_THRESHOLD = "LessThanOrEqualToThreshold"


class HistoryItemType(StrEnum):
    CONFIGURATION_UPDATE = "ConfigurationUpdate"
    STATE_UPDATE = "StateUpdate"
    ACTION = "Action"


class StandardUnit(StrEnum):
    SECONDS = "Seconds"
    MICROSECONDS = "Microseconds"
    MILLISECONDS = "Milliseconds"
    BYTES = "Bytes"
    KILOBYTES = "Kilobytes"
    MEGABYTES = "Megabytes"
    GIGABYTES = "Gigabytes"
    BITS = "Bits"
    PERCENT = "Percent"
    COUNT = "Count"
    BYTES_PER_SECOND = "Bytes/Second"
    COUNT_PER_SECOND = "Count/Second"
    NONE = "None"


class Dimension(BaseModel):
    model_config = _AWS_SHAPE

    name: StrictStr = Field(..., alias="Name")
    value: StrictStr = Field(..., alias="Value")

    def to_request(self) -> dict[str, str]:
        return {"Name": self.name, "Value": self.value}


class MetricDatum(BaseModel):
    """One data point to publish with put_metric_data."""

    model_config = _AWS_SHAPE

    metric_name: StrictStr = Field(..., alias="MetricName")
    value: float = Field(..., alias="Value")
    unit: StandardUnit | None = Field(None, alias="Unit")
    timestamp: datetime | None = Field(None, alias="Timestamp")
    dimensions: list[Dimension] = Field(default_factory=list, alias="Dimensions")

    def to_request(self) -> dict[str, Any]:
        datum: dict[str, Any] = {"MetricName": self.metric_name, "Value": self.value}
        if self.unit is not None:
            datum["Unit"] = self.unit.value
        if self.timestamp is not None:
            datum["Timestamp"] = self.timestamp
        if self.dimensions:
            datum["Dimensions"] = [d.to_request() for d in self.dimensions]
        return datum


class Metric(BaseModel):
    model_config = _AWS_SHAPE

    namespace: StrictStr | None = Field(None, alias="Namespace")
    metric_name: StrictStr | None = Field(None, alias="MetricName")
    dimensions: list[Dimension] = Field(default_factory=list, alias="Dimensions")


class MetricAlarm(BaseModel):
    model_config = _AWS_SHAPE

    alarm_name: StrictStr = Field(..., alias="AlarmName")
    alarm_arn: StrictStr | None = Field(None, alias="AlarmArn")
    alarm_description: StrictStr | None = Field(None, alias="AlarmDescription")
    actions_enabled: bool | None = Field(None, alias="ActionsEnabled")
    ok_actions: list[StrictStr] = Field(default_factory=list, alias="OKActions")
    alarm_actions: list[StrictStr] = Field(default_factory=list, alias="AlarmActions")
    insufficient_data_actions: list[StrictStr] = Field(
        default_factory=list, alias="InsufficientDataActions"
    )
    state_value: StateValue | None = Field(None, alias="StateValue")
    state_reason: StrictStr | None = Field(None, alias="StateReason")
    state_reason_data: StrictStr | None = Field(None, alias="StateReasonData")
    state_updated_timestamp: datetime | None = Field(None, alias="StateUpdatedTimestamp")
    metric_name: StrictStr | None = Field(None, alias="MetricName")
    namespace: StrictStr | None = Field(None, alias="Namespace")
    statistic: Statistic | None = Field(None, alias="Statistic")
    dimensions: list[Dimension] = Field(default_factory=list, alias="Dimensions")
    period: int | None = Field(None, alias="Period")
    unit: StrictStr | None = Field(None, alias="Unit")
    evaluation_periods: int | None = Field(None, alias="EvaluationPeriods")
    threshold: float | None = Field(None, alias="Threshold")
    comparison_operator: StrictStr | None = Field(None, alias="ComparisonOperator")


class AlarmHistoryItem(BaseModel):
    model_config = _AWS_SHAPE

    alarm_name: StrictStr | None = Field(None, alias="AlarmName")
    timestamp: datetime | None = Field(None, alias="Timestamp")
    history_item_type: StrictStr | None = Field(None, alias="HistoryItemType")
    history_summary: StrictStr | None = Field(None, alias="HistorySummary")
    history_data: StrictStr | None = Field(None, alias="HistoryData")


class Datapoint(BaseModel):
    model_config = _AWS_SHAPE

    timestamp: datetime | None = Field(None, alias="Timestamp")
    sample_count: float | None = Field(None, alias="SampleCount")
    average: float | None = Field(None, alias="Average")
    sum: float | None = Field(None, alias="Sum")
    minimum: float | None = Field(None, alias="Minimum")
    maximum: float | None = Field(None, alias="Maximum")
    unit: StrictStr | None = Field(None, alias="Unit")


class DescribeAlarmsResult(BaseModel):
    model_config = _AWS_SHAPE

    metric_alarms: list[MetricAlarm] = Field(default_factory=list, alias="MetricAlarms")
    next_token: StrictStr | None = Field(None, alias="NextToken")


class DescribeAlarmsForMetricResult(BaseModel):
    model_config = _AWS_SHAPE

    metric_alarms: list[MetricAlarm] = Field(default_factory=list, alias="MetricAlarms")


class DescribeAlarmHistoryResult(BaseModel):
    model_config = _AWS_SHAPE

    alarm_history_items: list[AlarmHistoryItem] = Field(
        default_factory=list, alias="AlarmHistoryItems"
    )
    next_token: StrictStr | None = Field(None, alias="NextToken")


class GetMetricStatisticsResult(BaseModel):
    model_config = _AWS_SHAPE

    label: StrictStr | None = Field(None, alias="Label")
    datapoints: list[Datapoint] = Field(default_factory=list, alias="Datapoints")


class ListMetricsResult(BaseModel):
    model_config = _AWS_SHAPE

    metrics: list[Metric] = Field(default_factory=list, alias="Metrics")
    next_token: StrictStr | None = Field(None, alias="NextToken")
