"""Thin asynchronous wrapper clients for AWS services."""

from awswrap.cloudsearch.client import CloudSearchClient
from awswrap.cloudwatch.client import CloudWatchClient
from awswrap.core.config import AWSSettings
from awswrap.s3.client import S3Client

__version__ = "0.5.0"
__description__ = "Async wrappers for AWS S3, CloudWatch and CloudSearch"

__all__ = ["AWSSettings", "CloudSearchClient", "CloudWatchClient", "S3Client"]
