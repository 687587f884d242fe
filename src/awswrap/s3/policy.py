"""Bucket policy documents.

A `Policy` renders to (and parses from) the IAM access policy language
JSON accepted by PutBucketPolicy.
"""

import json
from collections.abc import Mapping
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from awswrap.core.constants import S3_POLICY_VERSION

ConditionValue = bool | int | float | str


class Effect(StrEnum):
    ALLOW = "Allow"
    DENY = "Deny"


class ConditionKey(StrEnum):
    # global keys
    CURRENT_TIME = "aws:CurrentTime"
    EPOCH_TIME = "aws:EpochTime"
    MULTI_FACTOR_AUTH_AGE = "aws:MultiFactorAuthAge"
    PRINCIPAL_TYPE = "aws:principaltype"
    SECURE_TRANSPORT = "aws:SecureTransport"
    SOURCE_ARN = "aws:SourceArn"
    SOURCE_IP = "aws:SourceIp"
    USER_AGENT = "aws:UserAgent"
    USER_ID = "aws:userid"
    USERNAME = "aws:username"
    REFERER = "aws:Referer"
    # S3 keys
    ACL = "s3:x-amz-acl"
    COPY_SOURCE = "s3:x-amz-copy-source"
    METADATA_DIRECTIVE = "s3:x-amz-metadata-directive"
    SERVER_SIDE_ENCRYPTION = "s3:x-amz-server-side-encryption"
    VERSION_ID = "s3:VersionId"
    LOCATION_CONSTRAINT = "s3:LocationConstraint"
    DELIMITER = "s3:delimiter"
    MAX_KEYS = "s3:max-keys"
    PREFIX = "s3:prefix"


class Operator(StrEnum):
    STRING_EQUALS = "StringEquals"
    STRING_NOT_EQUALS = "StringNotEquals"
    STRING_EQUALS_IGNORE_CASE = "StringEqualsIgnoreCase"
    STRING_NOT_EQUALS_IGNORE_CASE = "StringNotEqualsIgnoreCase"
    STRING_LIKE = "StringLike"
    STRING_NOT_LIKE = "StringNotLike"
    NUMERIC_EQUALS = "NumericEquals"
    NUMERIC_NOT_EQUALS = "NumericNotEquals"
    NUMERIC_LESS_THAN = "NumericLessThan"
    NUMERIC_LESS_THAN_EQUALS = "NumericLessThanEquals"
    NUMERIC_GREATER_THAN = "NumericGreaterThan"
    NUMERIC_GREATER_THAN_EQUALS = "NumericGreaterThanEquals"
    DATE_EQUALS = "DateEquals"
    DATE_NOT_EQUALS = "DateNotEquals"
    DATE_LESS_THAN = "DateLessThan"
    DATE_LESS_THAN_EQUALS = "DateLessThanEquals"
    DATE_GREATER_THAN = "DateGreaterThan"
    DATE_GREATER_THAN_EQUALS = "DateGreaterThanEquals"
    BOOL = "Bool"
    IP_ADDRESS = "IpAddress"
    NOT_IP_ADDRESS = "NotIpAddress"
    ARN_EQUALS = "ArnEquals"
    ARN_NOT_EQUALS = "ArnNotEquals"
    ARN_LIKE = "ArnLike"
    ARN_NOT_LIKE = "ArnNotLike"
    NULL = "Null"


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    return [value]


class Condition(BaseModel):
    """One `operator: {key: values}` entry of a statement's Condition block."""

    model_config = ConfigDict(frozen=True)

    operator: Operator
    key: StrictStr
    values: tuple[ConditionValue, ...]

    @classmethod
    def of(cls, operator: Operator, key: str, *values: ConditionValue | datetime) -> "Condition":
        rendered = tuple(v.isoformat() if isinstance(v, datetime) else v for v in values)
        return cls(operator=operator, key=str(key), values=rendered)

    @classmethod
    def string_equals(cls, key: str, *values: str) -> "Condition":
        return cls.of(Operator.STRING_EQUALS, key, *values)

    @classmethod
    def string_not_equals(cls, key: str, *values: str) -> "Condition":
        return cls.of(Operator.STRING_NOT_EQUALS, key, *values)

    @classmethod
    def string_like(cls, key: str, *values: str) -> "Condition":
        return cls.of(Operator.STRING_LIKE, key, *values)

    @classmethod
    def string_not_like(cls, key: str, *values: str) -> "Condition":
        return cls.of(Operator.STRING_NOT_LIKE, key, *values)

    @classmethod
    def numeric_equals(cls, key: str, *values: int | float) -> "Condition":
        return cls.of(Operator.NUMERIC_EQUALS, key, *values)

    @classmethod
    def numeric_less_than(cls, key: str, *values: int | float) -> "Condition":
        return cls.of(Operator.NUMERIC_LESS_THAN, key, *values)

    @classmethod
    def numeric_greater_than(cls, key: str, *values: int | float) -> "Condition":
        return cls.of(Operator.NUMERIC_GREATER_THAN, key, *values)

    @classmethod
    def date_less_than(cls, key: str, *values: datetime | str) -> "Condition":
        return cls.of(Operator.DATE_LESS_THAN, key, *values)

    @classmethod
    def date_greater_than(cls, key: str, *values: datetime | str) -> "Condition":
        return cls.of(Operator.DATE_GREATER_THAN, key, *values)

    @classmethod
    def boolean(cls, key: str, value: bool) -> "Condition":
        return cls.of(Operator.BOOL, key, value)

    @classmethod
    def ip_address(cls, key: str, *cidrs: str) -> "Condition":
        return cls.of(Operator.IP_ADDRESS, key, *cidrs)

    @classmethod
    def not_ip_address(cls, key: str, *cidrs: str) -> "Condition":
        return cls.of(Operator.NOT_IP_ADDRESS, key, *cidrs)

    @classmethod
    def arn_like(cls, key: str, *arns: str) -> "Condition":
        return cls.of(Operator.ARN_LIKE, key, *arns)

    @classmethod
    def null(cls, key: str, is_null: bool) -> "Condition":
        return cls.of(Operator.NULL, key, is_null)

    @classmethod
    def exists(cls, key: str) -> "Condition":
        """Match when `key` is present in the request."""
        return cls.null(key, False)


class Statement(BaseModel):
    model_config = ConfigDict(frozen=True)

    effect: Effect
    sid: StrictStr | None = None
    principal: dict[str, tuple[StrictStr, ...]] | None = None
    action: tuple[StrictStr, ...] = Field(..., min_length=1)
    resource: tuple[StrictStr, ...] = Field(..., min_length=1)
    conditions: tuple[Condition, ...] = ()

    def to_document(self) -> dict[str, Any]:
        statement: dict[str, Any] = {}
        if self.sid:
            statement["Sid"] = self.sid
        statement["Effect"] = self.effect.value
        if self.principal is not None:
            statement["Principal"] = {k: list(v) for k, v in self.principal.items()}
        statement["Action"] = list(self.action)
        statement["Resource"] = list(self.resource)

        if self.conditions:
            block: dict[str, dict[str, list[ConditionValue]]] = {}
            for condition in self.conditions:
                block.setdefault(condition.operator.value, {})[condition.key] = list(
                    condition.values
                )
            statement["Condition"] = block

        return statement

    @classmethod
    def from_document(cls, data: Mapping[str, Any]) -> "Statement":
        principal = data.get("Principal")
        if principal == "*":
            principal = {"AWS": "*"}

        conditions = [
            Condition(operator=Operator(operator), key=key, values=tuple(_as_list(values)))
            for operator, entries in data.get("Condition", {}).items()
            for key, values in entries.items()
        ]

        return cls(
            effect=Effect(data["Effect"]),
            sid=data.get("Sid"),
            principal=(
                {k: tuple(_as_list(v)) for k, v in principal.items()}
                if principal is not None
                else None
            ),
            action=tuple(_as_list(data["Action"])),
            resource=tuple(_as_list(data["Resource"])),
            conditions=tuple(conditions),
        )


class Policy(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: StrictStr | None = None
    version: StrictStr = S3_POLICY_VERSION
    statements: tuple[Statement, ...] = Field(..., min_length=1)

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {"Version": self.version}
        if self.id:
            document["Id"] = self.id
        document["Statement"] = [s.to_document() for s in self.statements]
        return document

    def to_json(self) -> str:
        return json.dumps(self.to_document())

    @classmethod
    def from_document(cls, data: Mapping[str, Any]) -> "Policy":
        return cls(
            id=data.get("Id"),
            version=data.get("Version", S3_POLICY_VERSION),
            statements=tuple(Statement.from_document(s) for s in _as_list(data["Statement"])),
        )

    @classmethod
    def from_json(cls, raw: str) -> "Policy":
        return cls.from_document(json.loads(raw))
