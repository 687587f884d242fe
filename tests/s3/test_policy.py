import json
from datetime import datetime, timezone

from awswrap.s3.policy import Condition, ConditionKey, Effect, Operator, Policy, Statement


class TestCondition:
    def test_string_equals(self):
        condition = Condition.string_equals(ConditionKey.USER_AGENT, "curl")

        assert condition.operator == Operator.STRING_EQUALS
        assert condition.values == ("curl",)

    def test_ip_address_accepts_many_values(self):
        condition = Condition.ip_address(ConditionKey.SOURCE_IP, "10.0.0.0/8", "192.168.0.0/16")

        assert condition.values == ("10.0.0.0/8", "192.168.0.0/16")

    def test_date_values_render_as_isoformat(self):
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)

        condition = Condition.date_less_than(ConditionKey.CURRENT_TIME, moment)

        assert condition.values == ("2024-01-01T00:00:00+00:00",)

    def test_exists(self):
        condition = Condition.exists(ConditionKey.SECURE_TRANSPORT)

        assert condition.operator == Operator.NULL
        assert condition.values == (False,)


class TestStatement:
    def test_to_document(self):
        statement = Statement(
            effect=Effect.DENY,
            sid="DenyInsecure",
            principal={"AWS": ("*",)},
            action=("s3:GetObject",),
            resource=("arn:aws:s3:::bucket/*",),
            conditions=(Condition.boolean(ConditionKey.SECURE_TRANSPORT, False),),
        )

        assert statement.to_document() == {
            "Sid": "DenyInsecure",
            "Effect": "Deny",
            "Principal": {"AWS": ["*"]},
            "Action": ["s3:GetObject"],
            "Resource": ["arn:aws:s3:::bucket/*"],
            "Condition": {"Bool": {"aws:SecureTransport": [False]}},
        }

    def test_from_document_normalises_scalars(self):
        statement = Statement.from_document(
            {
                "Effect": "Allow",
                "Principal": "*",
                "Action": "s3:GetObject",
                "Resource": "arn:aws:s3:::bucket/*",
            }
        )

        assert statement.principal == {"AWS": ("*",)}
        assert statement.action == ("s3:GetObject",)
        assert statement.conditions == ()


class TestPolicy:
    def test_json_round_trip(self):
        policy = Policy(
            id="public-read",
            statements=(
                Statement(
                    effect=Effect.ALLOW,
                    sid="PublicRead",
                    principal={"AWS": ("*",)},
                    action=("s3:GetObject",),
                    resource=("arn:aws:s3:::bucket/*",),
                    conditions=(
                        Condition.string_equals(ConditionKey.USER_AGENT, "awswrap"),
                        Condition.exists(ConditionKey.REFERER),
                    ),
                ),
            ),
        )

        document = json.loads(policy.to_json())

        assert document["Version"] == "2008-10-17"
        assert document["Id"] == "public-read"
        assert document["Statement"][0]["Condition"] == {
            "StringEquals": {"aws:UserAgent": ["awswrap"]},
            "Null": {"aws:Referer": [False]},
        }
        assert Policy.from_json(policy.to_json()) == policy
