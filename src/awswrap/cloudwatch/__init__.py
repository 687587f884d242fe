from awswrap.cloudwatch.client import CloudWatchClient

__all__ = ["CloudWatchClient"]
