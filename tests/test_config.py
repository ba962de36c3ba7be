"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from llmready.models.config import (
    DEFAULT_CONTENT_SELECTORS,
    ByteSize,
    CacheConfig,
    LimitsConfig,
    LinkEntry,
    LlmReadyConfig,
)


class TestByteSize:
    """Tests for ByteSize parsing."""

    def test_parses_integers(self):
        """Test raw byte counts."""
        assert ByteSize._parse(1024) == 1024

    def test_parses_units(self):
        """Test human-readable sizes."""
        assert ByteSize._parse("200kb") == 204800
        assert ByteSize._parse("1.5MB") == int(1.5 * 1024**2)
        assert ByteSize._parse("512") == 512

    def test_rejects_garbage(self):
        """Test invalid size strings."""
        with pytest.raises(ValueError):
            ByteSize._parse("lots")

    def test_rejects_bool(self):
        """Test that booleans are not sizes."""
        with pytest.raises(ValueError):
            ByteSize._parse(True)


class TestLlmReadyConfig:
    """Tests for LlmReadyConfig."""

    def test_defaults(self):
        """Test default values."""
        config = LlmReadyConfig()

        assert config.content_selectors == DEFAULT_CONTENT_SELECTORS
        assert "nav" in config.ignore_selectors
        assert config.eyebrow_auto_detect is True
        assert config.cache.ttl_minutes == 1440
        assert config.cache.prefix == "llm_ready"
        assert config.llms_txt.cache_ttl_minutes == 60
        assert config.converter.table_support is True
        assert config.limits.max_input_bytes == 5 * 1024**2
        assert config.extractor == "default"

    def test_default_lists_are_independent(self):
        """Test that instances do not share mutable defaults."""
        first = LlmReadyConfig()
        first.content_selectors.append(".custom")

        assert ".custom" not in LlmReadyConfig().content_selectors

    def test_rejects_unknown_keys(self):
        """Test that typos in config are reported."""
        with pytest.raises(ValidationError):
            LlmReadyConfig(content_selector=["main"])

    def test_rejects_unknown_extractor(self):
        """Test the extractor name whitelist."""
        with pytest.raises(ValidationError):
            LlmReadyConfig(extractor="readability")

    def test_rejects_non_positive_ttl(self):
        """Test TTL bounds."""
        with pytest.raises(ValidationError):
            CacheConfig(ttl_minutes=0)

    def test_memory_cache_size_bounds(self):
        """Test the in-memory cache size default and bounds."""
        assert CacheConfig().max_entries == 10_000
        assert CacheConfig(max_entries=None).max_entries is None
        with pytest.raises(ValidationError):
            CacheConfig(max_entries=0)

    def test_limits_accept_strings_and_none(self):
        """Test size limit parsing and unlimited."""
        assert LimitsConfig(max_input_bytes="2mb").max_input_bytes == 2 * 1024**2
        assert LimitsConfig(max_input_bytes=None).max_input_bytes is None


class TestYaml:
    """Tests for YAML loading and dumping."""

    def test_from_yaml(self):
        """Test loading nested settings."""
        config = LlmReadyConfig.from_yaml(
            """
content_selectors:
  - article
eyebrow_auto_detect: false
cache:
  enabled: false
  directory: /tmp/llmready
frontmatter:
  include_last_modified: false
  custom_fields:
    site_name: Example
llms_txt:
  title: Example Docs
  sections:
    Guides:
      - /docs/install
      - url: https://example.com/faq
        description: FAQ
limits:
  max_input_bytes: 1mb
"""
        )

        assert config.content_selectors == ["article"]
        assert config.eyebrow_auto_detect is False
        assert config.cache.enabled is False
        assert str(config.cache.directory) == "/tmp/llmready"
        assert config.frontmatter.custom_fields == {"site_name": "Example"}
        assert config.llms_txt.sections["Guides"][1] == LinkEntry(url="https://example.com/faq", description="FAQ")
        assert config.limits.max_input_bytes == 1024**2

    def test_empty_yaml_gives_defaults(self):
        """Test that an empty file is a valid config."""
        assert LlmReadyConfig.from_yaml("") == LlmReadyConfig()

    def test_round_trip(self):
        """Test dumping and reloading."""
        config = LlmReadyConfig(content_selectors=["main"], log_level="DEBUG")

        assert LlmReadyConfig.from_yaml(config.to_yaml()) == config

    def test_from_yaml_file(self, tmp_path):
        """Test loading from disk."""
        path = tmp_path / "llmready.yaml"
        path.write_text("extractor: fallback\n", encoding="utf-8")

        assert LlmReadyConfig.from_yaml_file(path).extractor == "fallback"
