import pytest

from awswrap.core.errors import NotFoundError, S3Error, ValidationError
from awswrap.s3.client import S3Client
from awswrap.s3.models import (
    LOG_DELIVERY,
    MFA,
    CannedACL,
    CanonicalUser,
    MFADeleteState,
    VersionState,
    grant_read,
    grant_write,
)


class TestCreateBucket:
    async def test_create_bucket_in_region(self, s3, s3_client):
        bucket = await s3.buckets.create("awswrap-created")

        assert bucket.name == "awswrap-created"
        location = s3_client.get_bucket_location(Bucket="awswrap-created")
        assert location["LocationConstraint"] == "eu-west-1"

    async def test_create_bucket_with_canned_acl(self, s3, s3_client):
        await s3.buckets.create("awswrap-public", acl=CannedACL.PUBLIC_READ)

        acl = s3_client.get_bucket_acl(Bucket="awswrap-public")
        uris = [g["Grantee"].get("URI") for g in acl["Grants"]]
        assert "http://acs.amazonaws.com/groups/global/AllUsers" in uris

    async def test_us_east_1_omits_location_constraint(self, dummy_adapter):
        adapter = dummy_adapter(region_name="us-east-1")
        client = S3Client(adapter=adapter)

        await client.buckets.create("b")

        assert adapter.calls == [("create_bucket", {"bucket": "b"})]

    async def test_grants_become_request_headers(self, dummy_adapter):
        adapter = dummy_adapter(region_name="us-east-1")
        client = S3Client(adapter=adapter)

        await client.buckets.create(
            "b",
            permissions=grant_read(CanonicalUser(id="abc")) + grant_write(LOG_DELIVERY),
        )

        _, kwargs = adapter.calls[0]
        assert kwargs["GrantRead"] == 'id="abc"'
        assert kwargs["GrantWrite"] == 'uri="http://acs.amazonaws.com/groups/s3/LogDelivery"'

    async def test_acl_and_grants_are_exclusive(self, dummy_adapter):
        adapter = dummy_adapter()
        client = S3Client(adapter=adapter)

        with pytest.raises(ValidationError):
            await client.buckets.create(
                "b",
                acl=CannedACL.PRIVATE,
                permissions=grant_read(CanonicalUser(id="abc")),
            )

        assert adapter.calls == []

    async def test_create_existing_bucket_raises_s3_error(self, s3, s3_bucket):
        with pytest.raises(S3Error) as exc:
            await s3.buckets.create(s3_bucket)

        assert exc.value.error_code in {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}


class TestListAndDeleteBuckets:
    async def test_list_buckets(self, s3, s3_bucket, make_bucket):
        make_bucket("awswrap-second")

        names = [b.name for b in await s3.buckets.list()]

        assert s3_bucket in names
        assert "awswrap-second" in names

    async def test_delete_bucket(self, s3, make_bucket):
        make_bucket("awswrap-doomed")

        await s3.buckets.delete("awswrap-doomed")

        assert "awswrap-doomed" not in [b.name for b in await s3.buckets.list()]

    async def test_delete_missing_bucket_raises_not_found(self, s3):
        with pytest.raises(NotFoundError) as exc:
            await s3.buckets.delete("awswrap-missing")

        assert exc.value.error_code == "NoSuchBucket"
        assert exc.value.details["bucket"] == "awswrap-missing"


class TestVersioning:
    async def test_enable_and_read_versioning(self, s3, s3_bucket):
        await s3.buckets.set_versioning_configuration(s3_bucket, VersionState.ENABLED)

        config = await s3.buckets.get_versioning_configuration(s3_bucket)

        assert config.status == VersionState.ENABLED

    async def test_unversioned_bucket_has_no_status(self, s3, s3_bucket):
        config = await s3.buckets.get_versioning_configuration(s3_bucket)

        assert config.status is None

    async def test_mfa_delete_sends_device_token(self, dummy_adapter):
        adapter = dummy_adapter()
        client = S3Client(adapter=adapter)

        await client.buckets.set_versioning_configuration(
            "b",
            VersionState.ENABLED,
            mfa_delete=(MFADeleteState.ENABLED, MFA(serial="arn:mfa/root", token="123456")),
        )

        assert adapter.calls == [
            (
                "put_bucket_versioning",
                {
                    "bucket": "b",
                    "configuration": {"Status": "Enabled", "MFADelete": "Enabled"},
                    "mfa": "arn:mfa/root 123456",
                },
            )
        ]
