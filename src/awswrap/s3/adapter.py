"""Thin adapter for interacting with Amazon S3."""

from typing import Any

import boto3

from awswrap.core.config import AWSSettings


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Maps keyword arguments onto boto3 request parameters
    - Does NOT handle errors (lets them bubble up)
    - Service clients catch and translate errors
    """

    def __init__(self, client: Any | None = None, settings: AWSSettings | None = None) -> None:
        """Use the given boto3 client or create one from settings."""
        settings = settings or AWSSettings.from_env()
        self.region_name = settings.region_name
        self._client = client or boto3.client(
            "s3",
            endpoint_url=settings.endpoint_url,
            region_name=settings.region_name,
        )

    @property
    def client(self) -> Any:
        return self._client

    # ------------------------------------------------------------------
    # Buckets
    # ------------------------------------------------------------------

    def create_bucket(self, *, bucket: str, **params: Any) -> dict[str, Any]:
        return self._client.create_bucket(Bucket=bucket, **params)

    def delete_bucket(self, *, bucket: str) -> None:
        self._client.delete_bucket(Bucket=bucket)

    def list_buckets(self) -> dict[str, Any]:
        return self._client.list_buckets()

    def put_bucket_versioning(
        self,
        *,
        bucket: str,
        configuration: dict[str, str],
        mfa: str | None = None,
    ) -> None:
        params: dict[str, Any] = {"Bucket": bucket, "VersioningConfiguration": configuration}
        if mfa:
            params["MFA"] = mfa
        self._client.put_bucket_versioning(**params)

    def get_bucket_versioning(self, *, bucket: str) -> dict[str, Any]:
        return self._client.get_bucket_versioning(Bucket=bucket)

    # ------------------------------------------------------------------
    # ACL
    # ------------------------------------------------------------------

    def get_acl(self, *, bucket: str, key: str | None = None) -> dict[str, Any]:
        if key is None:
            return self._client.get_bucket_acl(Bucket=bucket)
        return self._client.get_object_acl(Bucket=bucket, Key=key)

    def put_acl(self, *, bucket: str, key: str | None = None, **params: Any) -> None:
        if key is None:
            self._client.put_bucket_acl(Bucket=bucket, **params)
        else:
            self._client.put_object_acl(Bucket=bucket, Key=key, **params)

    # ------------------------------------------------------------------
    # Bucket sub-resources
    # ------------------------------------------------------------------

    def put_bucket_cors(self, *, bucket: str, rules: list[dict[str, Any]]) -> None:
        self._client.put_bucket_cors(Bucket=bucket, CORSConfiguration={"CORSRules": rules})

    def get_bucket_cors(self, *, bucket: str) -> dict[str, Any]:
        return self._client.get_bucket_cors(Bucket=bucket)

    def delete_bucket_cors(self, *, bucket: str) -> None:
        self._client.delete_bucket_cors(Bucket=bucket)

    def put_bucket_lifecycle(self, *, bucket: str, rules: list[dict[str, Any]]) -> None:
        self._client.put_bucket_lifecycle_configuration(
            Bucket=bucket,
            LifecycleConfiguration={"Rules": rules},
        )

    def get_bucket_lifecycle(self, *, bucket: str) -> dict[str, Any]:
        return self._client.get_bucket_lifecycle_configuration(Bucket=bucket)

    def delete_bucket_lifecycle(self, *, bucket: str) -> None:
        self._client.delete_bucket_lifecycle(Bucket=bucket)

    def put_bucket_logging(self, *, bucket: str, status: dict[str, Any]) -> None:
        self._client.put_bucket_logging(Bucket=bucket, BucketLoggingStatus=status)

    def get_bucket_logging(self, *, bucket: str) -> dict[str, Any]:
        return self._client.get_bucket_logging(Bucket=bucket)

    def put_bucket_notification(self, *, bucket: str, configuration: dict[str, Any]) -> None:
        self._client.put_bucket_notification_configuration(
            Bucket=bucket,
            NotificationConfiguration=configuration,
        )

    def get_bucket_notification(self, *, bucket: str) -> dict[str, Any]:
        return self._client.get_bucket_notification_configuration(Bucket=bucket)

    def put_bucket_policy(self, *, bucket: str, policy: str) -> None:
        self._client.put_bucket_policy(Bucket=bucket, Policy=policy)

    def get_bucket_policy(self, *, bucket: str) -> dict[str, Any]:
        return self._client.get_bucket_policy(Bucket=bucket)

    def delete_bucket_policy(self, *, bucket: str) -> None:
        self._client.delete_bucket_policy(Bucket=bucket)

    def put_bucket_tagging(self, *, bucket: str, tags: list[dict[str, str]]) -> None:
        self._client.put_bucket_tagging(Bucket=bucket, Tagging={"TagSet": tags})

    def get_bucket_tagging(self, *, bucket: str) -> dict[str, Any]:
        return self._client.get_bucket_tagging(Bucket=bucket)

    def delete_bucket_tagging(self, *, bucket: str) -> None:
        self._client.delete_bucket_tagging(Bucket=bucket)

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def put_object(
        self,
        *,
        bucket: str,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        return self._client.put_object(
            Bucket=bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            Metadata=metadata or {},
        )

    def get_object(
        self,
        *,
        bucket: str,
        key: str,
        version_id: str | None = None,
    ) -> dict[str, Any]:
        """Fetch object and read its body before the connection is released."""
        params: dict[str, Any] = {"Bucket": bucket, "Key": key}
        if version_id:
            params["VersionId"] = version_id
        response = dict(self._client.get_object(**params))
        response["Body"] = response["Body"].read()
        return response

    def delete_object(
        self,
        *,
        bucket: str,
        key: str,
        version_id: str | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"Bucket": bucket, "Key": key}
        if version_id:
            params["VersionId"] = version_id
        return self._client.delete_object(**params)

    def delete_objects(self, *, bucket: str, objects: list[dict[str, str]]) -> dict[str, Any]:
        return self._client.delete_objects(
            Bucket=bucket,
            Delete={"Objects": objects, "Quiet": False},
        )

    def list_objects(self, *, bucket: str, prefix: str | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {"Bucket": bucket}
        if prefix:
            params["Prefix"] = prefix
        return self._client.list_objects_v2(**params)

    def list_object_versions(self, *, bucket: str, prefix: str | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {"Bucket": bucket}
        if prefix:
            params["Prefix"] = prefix
        return self._client.list_object_versions(**params)
