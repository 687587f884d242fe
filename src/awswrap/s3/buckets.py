"""Bucket operations: create, delete, list and versioning."""

from collections.abc import Iterable
from typing import Any

from aws_lambda_powertools import Logger

from awswrap.core.constants import S3_DEFAULT_REGION
from awswrap.core.errors import S3Error, ValidationError
from awswrap.core.service import ServiceArea
from awswrap.s3.models import (
    MFA,
    Bucket,
    CannedACL,
    Grant,
    MFADeleteState,
    VersionState,
    VersioningConfiguration,
    grants_to_headers,
)

logger = Logger(UTC=True)


class S3Area(ServiceArea):
    """Service area whose vendor failures surface as S3Error."""

    service_error = S3Error


class Buckets(S3Area):
    async def create(
        self,
        name: str,
        acl: CannedACL | None = None,
        permissions: Iterable[Grant] = (),
    ) -> Bucket:
        """Create a bucket in the adapter's region.

        A canned ACL and explicit grants are mutually exclusive.

        Raises:
            ValidationError: If both `acl` and `permissions` are given
            S3Error: If S3 rejects the request
        """
        grants = list(permissions)
        if acl is not None and grants:
            raise ValidationError(
                message="Cannot combine a canned ACL with explicit grants",
                details={"bucket": name, "acl": acl.value},
            )

        params: dict[str, Any] = {}
        region = self._adapter.region_name
        if region and region != S3_DEFAULT_REGION:
            params["CreateBucketConfiguration"] = {"LocationConstraint": region}
        if acl is not None:
            params["ACL"] = acl.value
        params.update(grants_to_headers(grants))

        await self._call(
            "CreateBucket",
            self._adapter.create_bucket,
            details={"bucket": name},
            bucket=name,
            **params,
        )
        logger.info("Bucket created", extra={"bucket": name})
        return Bucket(name=name)

    async def delete(self, name: str) -> None:
        await self._call(
            "DeleteBucket",
            self._adapter.delete_bucket,
            details={"bucket": name},
            bucket=name,
        )
        logger.info("Bucket deleted", extra={"bucket": name})

    async def list(self) -> list[Bucket]:
        response = await self._call("ListBuckets", self._adapter.list_buckets)
        return [Bucket.model_validate(b) for b in response.get("Buckets", [])]

    async def set_versioning_configuration(
        self,
        name: str,
        state: VersionState,
        mfa_delete: tuple[MFADeleteState, MFA] | None = None,
    ) -> None:
        """Enable or suspend versioning, optionally toggling MFA delete.

        Changing MFA delete requires the owner's device serial and current
        token, sent as the `x-amz-mfa` header.
        """
        configuration = {"Status": state.value}
        mfa: str | None = None
        if mfa_delete is not None:
            mfa_state, device = mfa_delete
            configuration["MFADelete"] = mfa_state.value
            mfa = device.header_value()

        await self._call(
            "PutBucketVersioning",
            self._adapter.put_bucket_versioning,
            details={"bucket": name, "state": state.value},
            bucket=name,
            configuration=configuration,
            mfa=mfa,
        )
        logger.info("Bucket versioning updated", extra={"bucket": name, "state": state.value})

    async def get_versioning_configuration(self, name: str) -> VersioningConfiguration:
        response = await self._call(
            "GetBucketVersioning",
            self._adapter.get_bucket_versioning,
            details={"bucket": name},
            bucket=name,
        )
        return VersioningConfiguration.model_validate(response)
