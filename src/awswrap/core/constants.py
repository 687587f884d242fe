"""Global constants used throughout the package.

Environment variable names, error codes and AWS API constants live here so
that adapters and clients never hardcode them.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_S3 = "S3_ERROR"
ERROR_CODE_CLOUDWATCH = "CLOUDWATCH_ERROR"
ERROR_CODE_CLOUDSEARCH = "CLOUDSEARCH_ERROR"
ERROR_CODE_CLOUDSEARCH_TRANSPORT = "CLOUDSEARCH_TRANSPORT_ERROR"
ERROR_CODE_CLOUDSEARCH_INVALID_RESPONSE = "CLOUDSEARCH_INVALID_RESPONSE"

# AWS error codes that mean "the thing you asked for does not exist"
NOT_FOUND_ERROR_CODES: Final[frozenset[str]] = frozenset(
    {
        "404",
        "NoSuchBucket",
        "NoSuchKey",
        "NoSuchVersion",
        "NoSuchTagSet",
        "NoSuchTagSetError",
        "NoSuchCORSConfiguration",
        "NoSuchLifecycleConfiguration",
        "NoSuchBucketPolicy",
        "ResourceNotFound",
    }
)

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_REGION = "AWS_REGION"
ENV_AWS_DEFAULT_REGION = "AWS_DEFAULT_REGION"
ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_MAX_WORKERS = "AWSWRAP_MAX_WORKERS"

# ============================================================================
# S3
# ============================================================================

S3_DEFAULT_REGION = "us-east-1"
S3_LOG_DELIVERY_URI = "http://acs.amazonaws.com/groups/s3/LogDelivery"
S3_ALL_USERS_URI = "http://acs.amazonaws.com/groups/global/AllUsers"
S3_AUTHENTICATED_USERS_URI = "http://acs.amazonaws.com/groups/global/AuthenticatedUsers"
S3_DEFAULT_CONTENT_TYPE = "application/octet-stream"
S3_POLICY_VERSION = "2008-10-17"

# ============================================================================
# CloudWatch
# ============================================================================

CLOUDWATCH_MAX_DATUMS_PER_REQUEST = 20
CLOUDWATCH_DEFAULT_PERIOD = 60
CLOUDWATCH_DEFAULT_WINDOW_SECONDS = 3600

# ============================================================================
# CloudSearch
# ============================================================================

CLOUDSEARCH_API_VERSION = "2011-02-01"
CLOUDSEARCH_ENDPOINT_TEMPLATE = (
    "http://search-{name}-{id}.{region}.cloudsearch.amazonaws.com/{version}/search"
)
CLOUDSEARCH_DEFAULT_TIMEOUT = 30.0
