"""Tests for S3Config."""

from __future__ import annotations

import dataclasses

import pytest

from s3dirfs._config import S3Config
from s3dirfs._errors import ConfigurationError

FULL = {
    "accessKey": "AKIA",
    "secretKey": "s3cr3t",
    "endPoint": "http://minio:9000",
    "bucket": "data",
    "region": "eu-west-1",
}


class TestS3ConfigFields:
    def test_fields(self) -> None:
        cfg = S3Config(access_key="a", secret_key="s", endpoint="http://e", bucket="b", region="r", label="lbl")
        assert cfg.bucket == "b"
        assert cfg.label == "lbl"
        assert cfg.client_options == {}

    def test_defaults_are_blank(self) -> None:
        cfg = S3Config()
        assert cfg.label is None
        assert cfg.missing() == ("access_key", "secret_key", "endpoint", "bucket", "region")

    def test_secret_not_in_repr(self) -> None:
        cfg = S3Config.from_dict(FULL)
        assert "s3cr3t" not in repr(cfg)


class TestS3ConfigValidation:
    def test_validate_passes(self) -> None:
        S3Config.from_dict(FULL).validate()

    @pytest.mark.parametrize("name", ["accessKey", "secretKey", "endPoint", "bucket", "region"])
    def test_each_required_setting(self, name: str) -> None:
        data = {k: v for k, v in FULL.items() if k != name}
        with pytest.raises(ConfigurationError) as exc_info:
            S3Config.from_dict(data).validate()
        assert len(exc_info.value.missing) == 1

    def test_blank_value_counts_as_missing(self) -> None:
        with pytest.raises(ConfigurationError, match="bucket"):
            S3Config.from_dict({**FULL, "bucket": "   "}).validate()


class TestS3ConfigFromDict:
    def test_camel_case_keys(self) -> None:
        cfg = S3Config.from_dict({**FULL, "label": "prod"})
        assert cfg.access_key == "AKIA"
        assert cfg.secret_key == "s3cr3t"
        assert cfg.endpoint == "http://minio:9000"
        assert cfg.region == "eu-west-1"
        assert cfg.label == "prod"

    def test_snake_case_keys(self) -> None:
        cfg = S3Config.from_dict(
            {
                "access_key": "a",
                "secret_key": "s",
                "endpoint": "http://e",
                "bucket": "b",
                "region": "r",
                "client_options": {"use_ssl": False},
            }
        )
        assert cfg.missing() == ()
        assert cfg.client_options == {"use_ssl": False}

    def test_rejects_non_dict(self) -> None:
        with pytest.raises(TypeError):
            S3Config.from_dict(["bucket"])  # type: ignore[arg-type]

    def test_rejects_non_dict_client_options(self) -> None:
        with pytest.raises(TypeError, match="client_options"):
            S3Config.from_dict({**FULL, "clientOptions": "nope"})


class TestS3ConfigImmutability:
    def test_frozen(self) -> None:
        cfg = S3Config.from_dict(FULL)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.bucket = "other"  # type: ignore[misc]
