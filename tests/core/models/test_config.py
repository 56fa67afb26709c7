"""Unit tests for core.models.config"""

import pytest

from core.models.config import ImageHandlerConfig
from core.models.errors import ConfigurationError


class TestAllowedSourceBuckets:
    def test_splits_and_strips_entries(self) -> None:
        config = ImageHandlerConfig(source_buckets=" bucket-a ,bucket-b,  bucket-c")

        assert config.allowed_source_buckets() == ["bucket-a", "bucket-b", "bucket-c"]

    def test_drops_empty_entries(self) -> None:
        config = ImageHandlerConfig(source_buckets="bucket-a,, ,bucket-b,")

        assert config.allowed_source_buckets() == ["bucket-a", "bucket-b"]

    @pytest.mark.parametrize("value", [None, "", "  ", " , "])
    def test_missing_whitelist_raises(self, value) -> None:
        config = ImageHandlerConfig(source_buckets=value)

        with pytest.raises(ConfigurationError) as exc:
            config.allowed_source_buckets()

        assert exc.value.status == 400


class TestFromEnv:
    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("SOURCE_BUCKETS", "bucket-a,bucket-b")
        monkeypatch.setenv("PATH_PREFIX", "/image")
        monkeypatch.setenv("AUTO_WEBP", "Yes")

        config = ImageHandlerConfig.from_env()

        assert config.source_buckets == "bucket-a,bucket-b"
        assert config.path_prefix == "/image"
        assert config.auto_webp is True

    def test_defaults(self, monkeypatch) -> None:
        for name in ("SOURCE_BUCKETS", "PATH_PREFIX", "AUTO_WEBP"):
            monkeypatch.delenv(name, raising=False)

        config = ImageHandlerConfig.from_env()

        assert config.source_buckets is None
        assert config.path_prefix == ""
        assert config.auto_webp is False

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("true", True),
            ("1", True),
            ("ON", True),
            ("No", False),
            ("false", False),
            ("", False),
        ],
    )
    def test_auto_webp_flag(self, monkeypatch, value, expected) -> None:
        monkeypatch.setenv("AUTO_WEBP", value)

        assert ImageHandlerConfig.from_env().auto_webp is expected
