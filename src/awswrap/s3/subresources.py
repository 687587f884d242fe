"""Bucket sub-resources: ACL, CORS, lifecycle, logging, notifications, policy, tagging."""

from collections.abc import Iterable

from aws_lambda_powertools import Logger

from awswrap.core.errors import ValidationError
from awswrap.s3.buckets import S3Area
from awswrap.s3.models import (
    AccessControlPolicy,
    CannedACL,
    CORSRule,
    Grant,
    Grantee,
    LifecycleConf,
    LoggingGrant,
    LoggingPermission,
    LoggingStatus,
    NotificationConfiguration,
    Owner,
    Tag,
)
from awswrap.s3.policy import Policy

logger = Logger(UTC=True)


def _require(items: tuple, *, what: str, bucket: str) -> None:
    if not items:
        raise ValidationError(
            message=f"At least one {what} is required",
            details={"bucket": bucket},
        )


class ACL(S3Area):
    """Access control lists of buckets, or of objects when `key` is given."""

    async def get(self, bucket: str, key: str | None = None) -> AccessControlPolicy:
        response = await self._call(
            "GetAcl",
            self._adapter.get_acl,
            details={"bucket": bucket, "key": key},
            bucket=bucket,
            key=key,
        )
        return AccessControlPolicy(
            owner=Owner.model_validate(response["Owner"]),
            grants=[Grant.from_response(g) for g in response.get("Grants", [])],
        )

    async def set(
        self,
        bucket: str,
        grants: Iterable[Grant],
        owner: Owner,
        key: str | None = None,
    ) -> None:
        policy = {
            "Grants": [g.to_request() for g in grants],
            "Owner": owner.to_request(),
        }
        await self._call(
            "PutAcl",
            self._adapter.put_acl,
            details={"bucket": bucket, "key": key},
            bucket=bucket,
            key=key,
            AccessControlPolicy=policy,
        )
        logger.info("ACL updated", extra={"bucket": bucket, "key": key})

    async def set_canned(self, bucket: str, acl: CannedACL, key: str | None = None) -> None:
        await self._call(
            "PutAcl",
            self._adapter.put_acl,
            details={"bucket": bucket, "key": key, "acl": acl.value},
            bucket=bucket,
            key=key,
            ACL=acl.value,
        )
        logger.info("Canned ACL applied", extra={"bucket": bucket, "key": key, "acl": acl.value})


class CORS(S3Area):
    async def create(self, bucket: str, *rules: CORSRule) -> None:
        """Replace the bucket's CORS configuration with `rules`."""
        _require(rules, what="CORS rule", bucket=bucket)
        await self._call(
            "PutBucketCors",
            self._adapter.put_bucket_cors,
            details={"bucket": bucket},
            bucket=bucket,
            rules=[r.to_request() for r in rules],
        )
        logger.info("CORS configuration stored", extra={"bucket": bucket, "rules": len(rules)})

    async def get(self, bucket: str) -> list[CORSRule]:
        """Raises NotFoundError when the bucket has no CORS configuration."""
        response = await self._call(
            "GetBucketCors",
            self._adapter.get_bucket_cors,
            details={"bucket": bucket},
            bucket=bucket,
        )
        return [CORSRule.model_validate(r) for r in response.get("CORSRules", [])]

    async def delete(self, bucket: str) -> None:
        await self._call(
            "DeleteBucketCors",
            self._adapter.delete_bucket_cors,
            details={"bucket": bucket},
            bucket=bucket,
        )


class Lifecycle(S3Area):
    async def create(self, bucket: str, *confs: LifecycleConf) -> None:
        _require(confs, what="lifecycle rule", bucket=bucket)
        if any(c.lifetime is None for c in confs):
            raise ValidationError(
                message="Lifecycle rules need a lifetime to expire objects",
                details={"bucket": bucket},
            )
        await self._call(
            "PutBucketLifecycleConfiguration",
            self._adapter.put_bucket_lifecycle,
            details={"bucket": bucket},
            bucket=bucket,
            rules=[c.to_rule() for c in confs],
        )
        logger.info("Lifecycle configuration stored", extra={"bucket": bucket})

    async def get(self, bucket: str) -> list[LifecycleConf]:
        response = await self._call(
            "GetBucketLifecycleConfiguration",
            self._adapter.get_bucket_lifecycle,
            details={"bucket": bucket},
            bucket=bucket,
        )
        return [LifecycleConf.from_rule(r) for r in response.get("Rules", [])]

    async def delete(self, bucket: str) -> None:
        await self._call(
            "DeleteBucketLifecycle",
            self._adapter.delete_bucket_lifecycle,
            details={"bucket": bucket},
            bucket=bucket,
        )


class BucketLogging(S3Area):
    """Server access logging.

    The target bucket must grant WRITE and READ_ACP to the LogDelivery
    group (see `models.LOG_DELIVERY`) before logging can be enabled.
    """

    async def enable(
        self,
        bucket: str,
        target_bucket: str,
        grants: Iterable[tuple[Grantee, LoggingPermission]] = (),
        target_prefix: str | None = None,
    ) -> None:
        enabled = {
            "TargetBucket": target_bucket,
            "TargetPrefix": target_prefix if target_prefix is not None else f"{bucket}/",
        }
        target_grants = [
            LoggingGrant(grantee=grantee, permission=permission).to_request()
            for grantee, permission in grants
        ]
        if target_grants:
            enabled["TargetGrants"] = target_grants

        await self._call(
            "PutBucketLogging",
            self._adapter.put_bucket_logging,
            details={"bucket": bucket, "target_bucket": target_bucket},
            bucket=bucket,
            status={"LoggingEnabled": enabled},
        )
        logger.info("Logging enabled", extra={"bucket": bucket, "target_bucket": target_bucket})

    async def disable(self, bucket: str) -> None:
        await self._call(
            "PutBucketLogging",
            self._adapter.put_bucket_logging,
            details={"bucket": bucket},
            bucket=bucket,
            status={},
        )
        logger.info("Logging disabled", extra={"bucket": bucket})

    async def get(self, bucket: str) -> LoggingStatus | None:
        """Return the logging status, or None when logging is disabled."""
        response = await self._call(
            "GetBucketLogging",
            self._adapter.get_bucket_logging,
            details={"bucket": bucket},
            bucket=bucket,
        )
        enabled = response.get("LoggingEnabled")
        if not enabled:
            return None
        return LoggingStatus.from_response(enabled)


class Notifications(S3Area):
    async def create(self, bucket: str, *confs: NotificationConfiguration) -> None:
        _require(confs, what="notification configuration", bucket=bucket)
        await self._call(
            "PutBucketNotificationConfiguration",
            self._adapter.put_bucket_notification,
            details={"bucket": bucket},
            bucket=bucket,
            configuration={"TopicConfigurations": [c.to_request() for c in confs]},
        )
        logger.info("Notification configuration stored", extra={"bucket": bucket})

    async def get(self, bucket: str) -> list[NotificationConfiguration]:
        response = await self._call(
            "GetBucketNotificationConfiguration",
            self._adapter.get_bucket_notification,
            details={"bucket": bucket},
            bucket=bucket,
        )
        return [
            NotificationConfiguration.model_validate(c)
            for c in response.get("TopicConfigurations", [])
        ]


class Policies(S3Area):
    async def create(self, bucket: str, policy: Policy) -> None:
        await self._call(
            "PutBucketPolicy",
            self._adapter.put_bucket_policy,
            details={"bucket": bucket},
            bucket=bucket,
            policy=policy.to_json(),
        )
        logger.info("Bucket policy stored", extra={"bucket": bucket})

    async def get(self, bucket: str) -> Policy:
        response = await self._call(
            "GetBucketPolicy",
            self._adapter.get_bucket_policy,
            details={"bucket": bucket},
            bucket=bucket,
        )
        return Policy.from_json(response["Policy"])

    async def delete(self, bucket: str) -> None:
        await self._call(
            "DeleteBucketPolicy",
            self._adapter.delete_bucket_policy,
            details={"bucket": bucket},
            bucket=bucket,
        )


class Tags(S3Area):
    async def create(self, bucket: str, *tags: Tag) -> None:
        """Replace the bucket's tag set."""
        _require(tags, what="tag", bucket=bucket)
        await self._call(
            "PutBucketTagging",
            self._adapter.put_bucket_tagging,
            details={"bucket": bucket},
            bucket=bucket,
            tags=[t.to_request() for t in tags],
        )
        logger.info("Bucket tags stored", extra={"bucket": bucket, "tags": len(tags)})

    async def get(self, bucket: str) -> list[Tag]:
        """Raises NotFoundError (NoSuchTagSet) when the bucket has no tags."""
        response = await self._call(
            "GetBucketTagging",
            self._adapter.get_bucket_tagging,
            details={"bucket": bucket},
            bucket=bucket,
        )
        return [Tag.model_validate(t) for t in response.get("TagSet", [])]

    async def delete(self, bucket: str) -> None:
        await self._call(
            "DeleteBucketTagging",
            self._adapter.delete_bucket_tagging,
            details={"bucket": bucket},
            bucket=bucket,
        )
