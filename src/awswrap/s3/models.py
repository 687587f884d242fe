"""Pydantic models for S3 requests and results.

Result models accept the raw boto3 response shapes through field aliases,
so `Model.model_validate(response_item)` is the whole translation step.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from awswrap.core.constants import S3_LOG_DELIVERY_URI

_AWS_SHAPE = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


# ============================================================================
# Access control
# ============================================================================


class CannedACL(StrEnum):
    PRIVATE = "private"
    PUBLIC_READ = "public-read"
    PUBLIC_READ_WRITE = "public-read-write"
    AUTHENTICATED_READ = "authenticated-read"
    BUCKET_OWNER_READ = "bucket-owner-read"
    BUCKET_OWNER_FULL_CONTROL = "bucket-owner-full-control"
    LOG_DELIVERY_WRITE = "log-delivery-write"


class Permission(StrEnum):
    READ = "READ"
    WRITE = "WRITE"
    READ_ACP = "READ_ACP"
    WRITE_ACP = "WRITE_ACP"
    FULL_CONTROL = "FULL_CONTROL"


# Request parameter carrying each permission on CreateBucket / PutObjectAcl
PERMISSION_HEADERS: dict[Permission, str] = {
    Permission.READ: "GrantRead",
    Permission.WRITE: "GrantWrite",
    Permission.READ_ACP: "GrantReadACP",
    Permission.WRITE_ACP: "GrantWriteACP",
    Permission.FULL_CONTROL: "GrantFullControl",
}


class Email(BaseModel):
    """Grantee identified by the e-mail address of an AWS account."""

    model_config = ConfigDict(frozen=True)

    address: StrictStr

    def header_value(self) -> str:
        return f'emailAddress="{self.address}"'

    def to_grantee(self) -> dict[str, str]:
        return {"Type": "AmazonCustomerByEmail", "EmailAddress": self.address}


class CanonicalUser(BaseModel):
    """Grantee identified by canonical user id."""

    model_config = ConfigDict(frozen=True)

    id: StrictStr
    display_name: StrictStr | None = None

    def header_value(self) -> str:
        return f'id="{self.id}"'

    def to_grantee(self) -> dict[str, str]:
        return {"Type": "CanonicalUser", "ID": self.id}


class GroupUri(BaseModel):
    """Grantee identified by a predefined group URI."""

    model_config = ConfigDict(frozen=True)

    uri: StrictStr

    def header_value(self) -> str:
        return f'uri="{self.uri}"'

    def to_grantee(self) -> dict[str, str]:
        return {"Type": "Group", "URI": self.uri}


Grantee = Email | CanonicalUser | GroupUri

LOG_DELIVERY = GroupUri(uri=S3_LOG_DELIVERY_URI)


def grantee_from_response(data: Mapping[str, Any]) -> Grantee:
    """Build a grantee from a boto3 `Grantee` mapping."""
    kind = data.get("Type")
    if kind == "CanonicalUser":
        return CanonicalUser(id=data["ID"], display_name=data.get("DisplayName"))
    if kind == "Group":
        return GroupUri(uri=data["URI"])
    if kind == "AmazonCustomerByEmail":
        return Email(address=data["EmailAddress"])
    raise ValueError(f"Unknown grantee type: {kind!r}")


class Grant(BaseModel):
    model_config = ConfigDict(frozen=True)

    grantee: Grantee
    permission: Permission

    def to_request(self) -> dict[str, Any]:
        return {"Grantee": self.grantee.to_grantee(), "Permission": self.permission.value}

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> "Grant":
        return cls(
            grantee=grantee_from_response(data["Grantee"]),
            permission=Permission(data["Permission"]),
        )


def _grants(permission: Permission, grantees: Iterable[Grantee]) -> list[Grant]:
    return [Grant(grantee=g, permission=permission) for g in grantees]


def grant_read(*grantees: Grantee) -> list[Grant]:
    return _grants(Permission.READ, grantees)


def grant_write(*grantees: Grantee) -> list[Grant]:
    return _grants(Permission.WRITE, grantees)


def grant_read_acp(*grantees: Grantee) -> list[Grant]:
    return _grants(Permission.READ_ACP, grantees)


def grant_write_acp(*grantees: Grantee) -> list[Grant]:
    return _grants(Permission.WRITE_ACP, grantees)


def grant_full_control(*grantees: Grantee) -> list[Grant]:
    return _grants(Permission.FULL_CONTROL, grantees)


def grants_to_headers(grants: Iterable[Grant]) -> dict[str, str]:
    """Group grants into `Grant*` request parameters.

    Example:
        {"GrantRead": 'emailAddress="a@x.com", id="123"'}
    """
    grouped: dict[str, list[str]] = {}
    for grant in grants:
        grouped.setdefault(PERMISSION_HEADERS[grant.permission], []).append(
            grant.grantee.header_value()
        )
    return {header: ", ".join(values) for header, values in grouped.items()}


class Owner(BaseModel):
    model_config = _AWS_SHAPE

    id: StrictStr = Field(..., alias="ID")
    display_name: StrictStr | None = Field(None, alias="DisplayName")

    def to_request(self) -> dict[str, str]:
        owner = {"ID": self.id}
        if self.display_name:
            owner["DisplayName"] = self.display_name
        return owner


class AccessControlPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner: Owner
    grants: list[Grant] = Field(default_factory=list)


# ============================================================================
# Buckets and versioning
# ============================================================================


class Bucket(BaseModel):
    model_config = _AWS_SHAPE

    name: StrictStr = Field(..., alias="Name")
    creation_date: datetime | None = Field(None, alias="CreationDate")


class VersionState(StrEnum):
    ENABLED = "Enabled"
    SUSPENDED = "Suspended"


class MFADeleteState(StrEnum):
    ENABLED = "Enabled"
    DISABLED = "Disabled"


class MFA(BaseModel):
    """Serial number and current code of the bucket owner's MFA device."""

    model_config = ConfigDict(frozen=True)

    serial: StrictStr
    token: StrictStr

    def header_value(self) -> str:
        return f"{self.serial} {self.token}"


class VersioningConfiguration(BaseModel):
    model_config = _AWS_SHAPE

    status: VersionState | None = Field(None, alias="Status")
    mfa_delete: MFADeleteState | None = Field(None, alias="MFADelete")


# ============================================================================
# Tagging
# ============================================================================


class Tag(BaseModel):
    model_config = _AWS_SHAPE

    key: StrictStr = Field(..., alias="Key", min_length=1, max_length=128)
    value: StrictStr = Field(..., alias="Value", max_length=256)

    def to_request(self) -> dict[str, str]:
        return {"Key": self.key, "Value": self.value}


# ============================================================================
# CORS
# ============================================================================


class HTTPMethod(StrEnum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    HEAD = "HEAD"


class CORSRule(BaseModel):
    model_config = _AWS_SHAPE

    origins: list[StrictStr] = Field(..., alias="AllowedOrigins", min_length=1)
    methods: list[HTTPMethod] = Field(..., alias="AllowedMethods", min_length=1)
    headers: list[StrictStr] = Field(default_factory=list, alias="AllowedHeaders")
    max_age_seconds: int | None = Field(None, alias="MaxAgeSeconds", ge=0)
    expose_headers: list[StrictStr] = Field(default_factory=list, alias="ExposeHeaders")

    def to_request(self) -> dict[str, Any]:
        rule: dict[str, Any] = {
            "AllowedOrigins": list(self.origins),
            "AllowedMethods": [m.value for m in self.methods],
        }
        if self.headers:
            rule["AllowedHeaders"] = list(self.headers)
        if self.max_age_seconds is not None:
            rule["MaxAgeSeconds"] = self.max_age_seconds
        if self.expose_headers:
            rule["ExposeHeaders"] = list(self.expose_headers)
        return rule


# ============================================================================
# Lifecycle
# ============================================================================


class LifecycleStatus(StrEnum):
    ENABLED = "Enabled"
    DISABLED = "Disabled"


class LifecycleConf(BaseModel):
    """Expire objects under `prefix` once they reach `lifetime`.

    Rules read back from S3 that do not expire by a number of days
    (transition-only, dated or delete-marker rules) have `lifetime` None.
    """

    model_config = ConfigDict(frozen=True)

    id: StrictStr | None = None
    prefix: StrictStr = ""
    status: LifecycleStatus = LifecycleStatus.ENABLED
    lifetime: timedelta | None = None

    @field_validator("lifetime")
    @classmethod
    def validate_lifetime(cls, value: timedelta | None) -> timedelta | None:
        if value is None:
            return None
        # S3 expresses expiration in whole days
        if value.days < 1:
            raise ValueError("lifetime must be at least one day")
        return timedelta(days=value.days)

    def to_rule(self) -> dict[str, Any]:
        rule: dict[str, Any] = {
            "Filter": {"Prefix": self.prefix},
            "Status": self.status.value,
        }
        if self.lifetime is not None:
            rule["Expiration"] = {"Days": self.lifetime.days}
        if self.id:
            rule["ID"] = self.id
        return rule

    @classmethod
    def from_rule(cls, rule: Mapping[str, Any]) -> "LifecycleConf":
        prefix = rule.get("Prefix")
        if prefix is None:
            prefix = rule.get("Filter", {}).get("Prefix", "")
        days = rule.get("Expiration", {}).get("Days")
        return cls(
            id=rule.get("ID"),
            prefix=prefix,
            status=LifecycleStatus(rule["Status"]),
            lifetime=timedelta(days=days) if days else None,
        )


# ============================================================================
# Logging
# ============================================================================


class LoggingPermission(StrEnum):
    FULL_CONTROL = "FULL_CONTROL"
    READ = "READ"
    WRITE = "WRITE"


class LoggingGrant(BaseModel):
    model_config = ConfigDict(frozen=True)

    grantee: Grantee
    permission: LoggingPermission

    def to_request(self) -> dict[str, Any]:
        return {"Grantee": self.grantee.to_grantee(), "Permission": self.permission.value}


class LoggingStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_bucket: StrictStr
    target_prefix: StrictStr = ""
    grants: list[LoggingGrant] = Field(default_factory=list)

    @classmethod
    def from_response(cls, enabled: Mapping[str, Any]) -> "LoggingStatus":
        return cls(
            target_bucket=enabled["TargetBucket"],
            target_prefix=enabled.get("TargetPrefix", ""),
            grants=[
                LoggingGrant(
                    grantee=grantee_from_response(g["Grantee"]),
                    permission=LoggingPermission(g["Permission"]),
                )
                for g in enabled.get("TargetGrants", [])
            ],
        )


# ============================================================================
# Notifications
# ============================================================================


class Event(StrEnum):
    REDUCED_REDUNDANCY_LOST_OBJECT = "s3:ReducedRedundancyLostObject"
    OBJECT_CREATED = "s3:ObjectCreated:*"
    OBJECT_CREATED_PUT = "s3:ObjectCreated:Put"
    OBJECT_CREATED_POST = "s3:ObjectCreated:Post"
    OBJECT_CREATED_COPY = "s3:ObjectCreated:Copy"
    OBJECT_CREATED_COMPLETE_MULTIPART_UPLOAD = "s3:ObjectCreated:CompleteMultipartUpload"
    OBJECT_REMOVED = "s3:ObjectRemoved:*"
    OBJECT_REMOVED_DELETE = "s3:ObjectRemoved:Delete"
    OBJECT_REMOVED_DELETE_MARKER_CREATED = "s3:ObjectRemoved:DeleteMarkerCreated"
    OBJECT_RESTORE = "s3:ObjectRestore:*"
    OBJECT_RESTORE_POST = "s3:ObjectRestore:Post"
    OBJECT_RESTORE_COMPLETED = "s3:ObjectRestore:Completed"
    OBJECT_RESTORE_DELETE = "s3:ObjectRestore:Delete"
    REPLICATION = "s3:Replication:*"
    REPLICATION_OPERATION_FAILED = "s3:Replication:OperationFailedReplication"
    REPLICATION_OPERATION_NOT_TRACKED = "s3:Replication:OperationNotTracked"
    REPLICATION_OPERATION_MISSED_THRESHOLD = "s3:Replication:OperationMissedThreshold"
    REPLICATION_OPERATION_REPLICATED_AFTER_THRESHOLD = (
        "s3:Replication:OperationReplicatedAfterThreshold"
    )
    LIFECYCLE_EXPIRATION = "s3:LifecycleExpiration:*"
    LIFECYCLE_EXPIRATION_DELETE = "s3:LifecycleExpiration:Delete"
    LIFECYCLE_EXPIRATION_DELETE_MARKER_CREATED = "s3:LifecycleExpiration:DeleteMarkerCreated"
    LIFECYCLE_TRANSITION = "s3:LifecycleTransition"
    INTELLIGENT_TIERING = "s3:IntelligentTiering"
    OBJECT_TAGGING = "s3:ObjectTagging:*"
    OBJECT_TAGGING_PUT = "s3:ObjectTagging:Put"
    OBJECT_TAGGING_DELETE = "s3:ObjectTagging:Delete"
    OBJECT_ACL_PUT = "s3:ObjectAcl:Put"


class NotificationConfiguration(BaseModel):
    """SNS topic notified on bucket events."""

    model_config = _AWS_SHAPE

    topic: StrictStr = Field(..., alias="TopicArn")
    events: list[Event] = Field(..., alias="Events", min_length=1)
    id: StrictStr | None = Field(None, alias="Id")

    def to_request(self) -> dict[str, Any]:
        conf: dict[str, Any] = {
            "TopicArn": self.topic,
            "Events": [e.value for e in self.events],
        }
        if self.id:
            conf["Id"] = self.id
        return conf


# ============================================================================
# Objects
# ============================================================================


class ObjectSummary(BaseModel):
    model_config = _AWS_SHAPE

    key: StrictStr = Field(..., alias="Key")
    last_modified: datetime | None = Field(None, alias="LastModified")
    etag: StrictStr | None = Field(None, alias="ETag")
    size: int = Field(0, alias="Size")
    storage_class: StrictStr | None = Field(None, alias="StorageClass")
    owner: Owner | None = Field(None, alias="Owner")


class ObjectVersion(BaseModel):
    model_config = _AWS_SHAPE

    key: StrictStr = Field(..., alias="Key")
    version_id: StrictStr | None = Field(None, alias="VersionId")
    is_latest: bool = Field(False, alias="IsLatest")
    last_modified: datetime | None = Field(None, alias="LastModified")
    etag: StrictStr | None = Field(None, alias="ETag")
    size: int = Field(0, alias="Size")
    storage_class: StrictStr | None = Field(None, alias="StorageClass")
    owner: Owner | None = Field(None, alias="Owner")


class DeleteMarker(BaseModel):
    model_config = _AWS_SHAPE

    key: StrictStr = Field(..., alias="Key")
    version_id: StrictStr | None = Field(None, alias="VersionId")
    is_latest: bool = Field(False, alias="IsLatest")
    last_modified: datetime | None = Field(None, alias="LastModified")
    owner: Owner | None = Field(None, alias="Owner")


class VersionsResult(BaseModel):
    model_config = _AWS_SHAPE

    name: StrictStr = Field(..., alias="Name")
    prefix: StrictStr = Field("", alias="Prefix")
    versions: list[ObjectVersion] = Field(default_factory=list, alias="Versions")
    delete_markers: list[DeleteMarker] = Field(default_factory=list, alias="DeleteMarkers")
    is_truncated: bool = Field(False, alias="IsTruncated")


class ContentsResult(BaseModel):
    model_config = _AWS_SHAPE

    name: StrictStr = Field(..., alias="Name")
    prefix: StrictStr = Field("", alias="Prefix")
    contents: list[ObjectSummary] = Field(default_factory=list, alias="Contents")
    is_truncated: bool = Field(False, alias="IsTruncated")


class ObjectMetadata(BaseModel):
    """Response metadata of a put or delete."""

    model_config = _AWS_SHAPE

    version_id: StrictStr | None = Field(None, alias="VersionId")
    etag: StrictStr | None = Field(None, alias="ETag")
    delete_marker: bool = Field(False, alias="DeleteMarker")


class StoredObject(BaseModel):
    """An object body with the headers S3 returned alongside it."""

    model_config = ConfigDict(frozen=True)

    key: StrictStr
    body: bytes
    content_type: StrictStr | None = None
    content_length: int
    version_id: StrictStr | None = None
    etag: StrictStr | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class DeletedObject(BaseModel):
    model_config = _AWS_SHAPE

    key: StrictStr = Field(..., alias="Key")
    version_id: StrictStr | None = Field(None, alias="VersionId")
    delete_marker: bool = Field(False, alias="DeleteMarker")


class DeleteFailure(BaseModel):
    model_config = _AWS_SHAPE

    key: StrictStr = Field(..., alias="Key")
    version_id: StrictStr | None = Field(None, alias="VersionId")
    code: StrictStr = Field(..., alias="Code")
    message: StrictStr | None = Field(None, alias="Message")


class BatchDeleteResult(BaseModel):
    model_config = _AWS_SHAPE

    deleted: list[DeletedObject] = Field(default_factory=list, alias="Deleted")
    errors: list[DeleteFailure] = Field(default_factory=list, alias="Errors")
