"""Asynchronous S3 client grouping every bucket and object operation."""

from concurrent.futures import Executor
from types import TracebackType

from awswrap.core.config import AWSSettings
from awswrap.core.futures import ExecutorOwner
from awswrap.s3.adapter import S3Adapter
from awswrap.s3.buckets import Buckets
from awswrap.s3.objects import Objects
from awswrap.s3.subresources import (
    ACL,
    CORS,
    BucketLogging,
    Lifecycle,
    Notifications,
    Policies,
    Tags,
)


class S3Client(ExecutorOwner):
    """Entry point for S3.

    Example:
        async with S3Client() as s3:
            await s3.buckets.create("my-bucket")
            await s3.tags.create("my-bucket", Tag(key="Project", value="One"))
    """

    def __init__(
        self,
        settings: AWSSettings | None = None,
        adapter: S3Adapter | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.settings = settings or AWSSettings.from_env()
        self.adapter = adapter or S3Adapter(settings=self.settings)
        self._init_executor(self.settings, executor)

        self.buckets = Buckets(self.adapter, self._executor)
        self.objects = Objects(self.adapter, self._executor)
        self.acl = ACL(self.adapter, self._executor)
        self.cors = CORS(self.adapter, self._executor)
        self.lifecycle = Lifecycle(self.adapter, self._executor)
        self.logging = BucketLogging(self.adapter, self._executor)
        self.notifications = Notifications(self.adapter, self._executor)
        self.policies = Policies(self.adapter, self._executor)
        self.tags = Tags(self.adapter, self._executor)

    def close(self) -> None:
        """Shut down the executor if this client created it."""
        self._shutdown_executor()

    async def __aenter__(self) -> "S3Client":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
