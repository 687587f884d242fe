"""Object operations: upload, download, delete and listings."""

from collections.abc import Iterable
from pathlib import Path

from aws_lambda_powertools import Logger

from awswrap.core.errors import ValidationError
from awswrap.core.futures import wrap_async_method
from awswrap.core.mime import detect_content_type
from awswrap.s3.buckets import S3Area
from awswrap.s3.models import (
    BatchDeleteResult,
    ContentsResult,
    ObjectMetadata,
    StoredObject,
    VersionsResult,
)

logger = Logger(UTC=True)


class Objects(S3Area):
    async def put(
        self,
        bucket: str,
        source: Path | str,
        body: bytes | None = None,
        content_type: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> ObjectMetadata:
        """Upload a file or a byte string.

        Args:
            bucket: Target bucket
            source: Local file (its name becomes the key) or the object key
            body: Object bytes, required when `source` is a key
            content_type: Overrides detection from signature and extension
            metadata: User metadata stored as `x-amz-meta-*`

        Returns:
            ObjectMetadata with the new version id when versioning is enabled
        """
        if isinstance(source, Path):
            key = source.name
            if body is None:
                body = await wrap_async_method(source.read_bytes, executor=self._executor)
        else:
            key = source

        if body is None:
            raise ValidationError(
                message="Object body is required when uploading by key",
                details={"bucket": bucket, "key": key},
            )

        content_type = content_type or detect_content_type(key, body)

        response = await self._call(
            "PutObject",
            self._adapter.put_object,
            details={"bucket": bucket, "key": key, "size": len(body)},
            bucket=bucket,
            key=key,
            body=body,
            content_type=content_type,
            metadata=metadata,
        )
        logger.info("Object uploaded", extra={"bucket": bucket, "key": key})
        return ObjectMetadata.model_validate(response)

    async def get(self, bucket: str, key: str, version_id: str | None = None) -> StoredObject:
        response = await self._call(
            "GetObject",
            self._adapter.get_object,
            details={"bucket": bucket, "key": key, "version_id": version_id},
            bucket=bucket,
            key=key,
            version_id=version_id,
        )
        body: bytes = response["Body"]
        return StoredObject(
            key=key,
            body=body,
            content_type=response.get("ContentType"),
            content_length=response.get("ContentLength", len(body)),
            version_id=response.get("VersionId"),
            etag=response.get("ETag"),
            metadata=response.get("Metadata", {}),
        )

    async def delete(
        self,
        bucket: str,
        key: str,
        version_id: str | None = None,
    ) -> ObjectMetadata:
        response = await self._call(
            "DeleteObject",
            self._adapter.delete_object,
            details={"bucket": bucket, "key": key, "version_id": version_id},
            bucket=bucket,
            key=key,
            version_id=version_id,
        )
        logger.info("Object deleted", extra={"bucket": bucket, "key": key})
        return ObjectMetadata.model_validate(response)

    async def batch_delete(
        self,
        bucket: str,
        keys: Iterable[tuple[str, str | None]],
    ) -> BatchDeleteResult:
        """Delete several objects, or specific versions of them, in one request."""
        objects: list[dict[str, str]] = []
        for key, version_id in keys:
            entry = {"Key": key}
            if version_id:
                entry["VersionId"] = version_id
            objects.append(entry)

        if not objects:
            return BatchDeleteResult()

        response = await self._call(
            "DeleteObjects",
            self._adapter.delete_objects,
            details={"bucket": bucket, "count": len(objects)},
            bucket=bucket,
            objects=objects,
        )
        result = BatchDeleteResult.model_validate(response)
        if result.errors:
            logger.warning(
                "Some objects could not be deleted",
                extra={"bucket": bucket, "failed": [e.key for e in result.errors]},
            )
        return result

    async def content(self, bucket: str, prefix: str | None = None) -> ContentsResult:
        response = await self._call(
            "ListObjectsV2",
            self._adapter.list_objects,
            details={"bucket": bucket, "prefix": prefix},
            bucket=bucket,
            prefix=prefix,
        )
        return ContentsResult.model_validate(response)

    async def get_versions(self, bucket: str, prefix: str | None = None) -> VersionsResult:
        response = await self._call(
            "ListObjectVersions",
            self._adapter.list_object_versions,
            details={"bucket": bucket, "prefix": prefix},
            bucket=bucket,
            prefix=prefix,
        )
        return VersionsResult.model_validate(response)
