"""
Pytest configuration and fixtures for the wrapper client tests.
Provides AWS mocking, S3 and CloudWatch fixtures with proper cleanup.
"""

from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from awswrap.cloudwatch.adapter import CloudWatchAdapter
from awswrap.cloudwatch.client import CloudWatchClient
from awswrap.core.config import AWSSettings
from awswrap.s3.adapter import S3Adapter
from awswrap.s3.client import S3Client

TEST_REGION = "eu-west-1"
TEST_BUCKET = "awswrap-test-bucket"


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch):
    """Fake credentials so nothing can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_REGION", TEST_REGION)
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("AWSWRAP_MAX_WORKERS", raising=False)


@pytest.fixture
def settings() -> AWSSettings:
    return AWSSettings(region_name=TEST_REGION)


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


# ============================================================================
# S3
# ============================================================================


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """Raw boto3 S3 client for arranging and asserting state."""
    return boto3.client("s3", region_name=TEST_REGION)


@pytest.fixture
def s3(s3_client, settings) -> S3Client:
    """Wrapper client bound to the moto-backed boto3 client."""
    client = S3Client(settings=settings, adapter=S3Adapter(client=s3_client, settings=settings))
    yield client
    client.close()


def _create_bucket(s3_client, name: str) -> str:
    s3_client.create_bucket(
        Bucket=name,
        CreateBucketConfiguration={"LocationConstraint": TEST_REGION},
    )
    return name


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete every object version from a bucket."""
    try:
        paginator = s3_client.get_paginator("list_object_versions")
        for page in paginator.paginate(Bucket=bucket_name):
            entries = page.get("Versions", []) + page.get("DeleteMarkers", [])
            if entries:
                s3_client.delete_objects(
                    Bucket=bucket_name,
                    Delete={
                        "Objects": [
                            {"Key": e["Key"], "VersionId": e["VersionId"]} for e in entries
                        ]
                    },
                )
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client) -> str:
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    name = _create_bucket(s3_client, TEST_BUCKET)

    yield name

    _cleanup_s3_objects(s3_client, name)


@pytest.fixture
def make_bucket(s3_client) -> Callable[[str], str]:
    """
    Helper to create additional buckets.

    Usage:
        target = make_bucket("log-target")
    """

    def _make(name: str) -> str:
        return _create_bucket(s3_client, name)

    return _make


@pytest.fixture
def s3_put_object(s3_client, s3_bucket) -> Callable[[str, bytes], dict[str, Any]]:
    """
    Helper to upload an object into the test bucket.

    Usage:
        response = s3_put_object("docs/a.txt", b"hello")
    """

    def _put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        return s3_client.put_object(
            Bucket=s3_bucket, Key=key, Body=body, ContentType=content_type
        )

    return _put


@pytest.fixture
def s3_object_keys(s3_client, s3_bucket) -> Callable[[], list[str]]:
    """Helper returning the keys currently stored in the test bucket."""

    def _keys() -> list[str]:
        response = s3_client.list_objects_v2(Bucket=s3_bucket)
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _keys


# ============================================================================
# CloudWatch
# ============================================================================


@pytest.fixture(scope="function")
def cloudwatch_client(aws_mock):
    """Raw boto3 CloudWatch client for arranging and asserting state."""
    return boto3.client("cloudwatch", region_name=TEST_REGION)


@pytest.fixture
def cloudwatch(cloudwatch_client, settings) -> CloudWatchClient:
    client = CloudWatchClient(
        settings=settings,
        adapter=CloudWatchAdapter(client=cloudwatch_client, settings=settings),
    )
    yield client
    client.close()


@pytest.fixture
def put_alarm(cloudwatch_client) -> Callable[..., str]:
    """
    Helper to create a metric alarm directly through boto3.

    Usage:
        name = put_alarm("cpu-high")
    """

    def _put(name: str, metric_name: str = "CPUUtilization", namespace: str = "AWS/EC2") -> str:
        cloudwatch_client.put_metric_alarm(
            AlarmName=name,
            MetricName=metric_name,
            Namespace=namespace,
            Statistic="Average",
            Period=60,
            EvaluationPeriods=1,
            Threshold=80.0,
            ComparisonOperator="GreaterThanThreshold",
        )
        return name

    return _put


# ============================================================================
# Recording adapters
# ============================================================================


class DummyAdapter:
    """Records every adapter call and replays canned responses.

    Stands in for S3Adapter / CloudWatchAdapter where moto does not model
    an operation, or where a test asserts the exact request parameters.
    """

    def __init__(self, responses=None, error=None, region_name="us-east-1"):
        self.region_name = region_name
        self.responses = responses or {}
        self.error = error
        self.calls = []

    def __getattr__(self, name):
        def _method(**kwargs):
            self.calls.append((name, kwargs))
            if self.error is not None:
                raise self.error
            return self.responses.get(name, {})

        return _method


@pytest.fixture
def dummy_adapter() -> Callable[..., DummyAdapter]:
    """
    Helper to build a recording adapter.

    Usage:
        adapter = dummy_adapter(responses={"get_bucket_notification": {...}})
        client = S3Client(adapter=adapter)
    """

    def _make(responses=None, error=None, region_name="us-east-1") -> DummyAdapter:
        return DummyAdapter(responses=responses, error=error, region_name=region_name)

    return _make
