"""Thin adapter for interacting with Amazon CloudWatch."""

from typing import Any

import boto3

from awswrap.core.config import AWSSettings


class CloudWatchAdapter:
    """Low-level CloudWatch operations (mechanical, no error handling).

    Parameters are passed through in boto3's own naming; the service
    client builds them. Errors bubble up as botocore exceptions.
    """

    def __init__(self, client: Any | None = None, settings: AWSSettings | None = None) -> None:
        settings = settings or AWSSettings.from_env()
        self._client = client or boto3.client(
            "cloudwatch",
            endpoint_url=settings.endpoint_url,
            region_name=settings.region_name,
        )

    @property
    def client(self) -> Any:
        return self._client

    def delete_alarms(self, **params: Any) -> None:
        self._client.delete_alarms(**params)

    def describe_alarm_history(self, **params: Any) -> dict[str, Any]:
        return self._client.describe_alarm_history(**params)

    def describe_alarms(self, **params: Any) -> dict[str, Any]:
        return self._client.describe_alarms(**params)

    def describe_alarms_for_metric(self, **params: Any) -> dict[str, Any]:
        return self._client.describe_alarms_for_metric(**params)

    def disable_alarm_actions(self, **params: Any) -> None:
        self._client.disable_alarm_actions(**params)

    def enable_alarm_actions(self, **params: Any) -> None:
        self._client.enable_alarm_actions(**params)

    def get_metric_statistics(self, **params: Any) -> dict[str, Any]:
        return self._client.get_metric_statistics(**params)

    def list_metrics(self, **params: Any) -> dict[str, Any]:
        return self._client.list_metrics(**params)

    def put_metric_alarm(self, **params: Any) -> None:
        self._client.put_metric_alarm(**params)

    def put_metric_data(self, **params: Any) -> None:
        self._client.put_metric_data(**params)

    def set_alarm_state(self, **params: Any) -> None:
        self._client.set_alarm_state(**params)
