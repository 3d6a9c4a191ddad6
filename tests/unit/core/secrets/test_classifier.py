"""Tests for reference classification and region extraction."""

from __future__ import annotations

import pytest

from resolve_aws_secrets.core.secrets.base import ReferenceKind, SecretReference
from resolve_aws_secrets.core.secrets.classifier import classify, region_of


class TestClassify:
    @pytest.mark.parametrize(
        ("raw", "kind"),
        [
            ("arn:aws:secretsmanager:us-west-2:123456789012:secret:db-AbCdEf", ReferenceKind.SECRET_STORE_ARN),
            ("arn:aws-cn:secretsmanager:cn-north-1:1:secret:x", ReferenceKind.SECRET_STORE_ARN),
            ("arn:aws:ssm:eu-west-1:123456789012:parameter/app/config", ReferenceKind.PARAMETER_STORE_ARN),
            ("arn:aws:ssm:::parameter", ReferenceKind.PARAMETER_STORE_ARN),
            ("arn:aws:s3:::bucket:key:extra", ReferenceKind.NAME),
            ("arn:aws:secretsmanager:us-west-2:1", ReferenceKind.NAME),
            ("arn:secret1", ReferenceKind.NAME),
            ("prod/db/password", ReferenceKind.NAME),
            ("", ReferenceKind.NAME),
            ("ARN:aws:secretsmanager:us-west-2:1:secret:x", ReferenceKind.NAME),
        ],
        ids=[
            "secretsmanager",
            "secretsmanager-china-partition",
            "ssm",
            "ssm-empty-region",
            "other-service",
            "too-few-segments",
            "short-arn",
            "plain-name",
            "empty",
            "uppercase-prefix",
        ],
    )
    def test_kind(self, raw: str, kind: ReferenceKind) -> None:
        assert classify(raw).kind is kind

    def test_value_is_kept_verbatim(self) -> None:
        raw = "arn:aws:secretsmanager:us-west-2:1:secret:x"
        assert classify(raw) == SecretReference.secret_store_arn(raw)
        assert classify("plain") == SecretReference.name("plain")

    def test_is_arn(self) -> None:
        assert classify("arn:aws:ssm:us-east-1:1:parameter/x").is_arn
        assert not classify("arn:aws:s3:::a:b:c").is_arn


class TestRegionOf:
    def test_region_of_full_arn(self) -> None:
        assert region_of("arn:aws:secretsmanager:us-west-2:1:secret:x") == "us-west-2"

    def test_empty_region_is_not_none(self) -> None:
        region = region_of("arn:aws:ssm::1:parameter/x")
        assert region == ""
        assert region is not None

    def test_fewer_than_four_fields(self) -> None:
        assert region_of("arn:aws:ssm") is None
        assert region_of("plain-name") is None

    def test_exactly_four_fields(self) -> None:
        assert region_of("arn:aws:ssm:ap-south-1") == "ap-south-1"
