"""Tests for llms.txt generation."""

from llmready.cache.manager import MemoryCache
from llmready.llms_txt import LlmsTxtGenerator, format_label, route_to_label, url_to_label
from llmready.models.config import (
    AutoSectionConfig,
    LinkEntry,
    LlmReadyConfig,
    LlmsTxtConfig,
    OptionalSectionConfig,
)
from llmready.models.response import RouteInfo

BASE = "https://example.com"


def make_generator(**llms_txt):
    config = LlmReadyConfig(llms_txt=LlmsTxtConfig(**llms_txt))
    return LlmsTxtGenerator(config, base_url=BASE + "/", site_name="Example")


class TestLabels:
    """Tests for label helpers."""

    def test_format_label(self):
        """Test slug to title conversion."""
        assert format_label("getting-started") == "Getting Started"
        assert format_label("api_reference") == "Api Reference"

    def test_route_to_label(self):
        """Test labels for route URIs."""
        assert route_to_label("/") == "Home"
        assert route_to_label("docs/getting-started") == "Getting Started"

    def test_url_to_label(self):
        """Test labels for link URLs."""
        assert url_to_label("/docs/install.md") == "Install"


class TestLlmsTxtGenerator:
    """Tests for LlmsTxtGenerator."""

    def test_minimal_document(self):
        """Test the header, usage note and auto section."""
        text = make_generator().generate(["/", "about", "docs/getting-started"])

        assert text.startswith("# Example\n\n")
        assert "Append `.md` to any URL" in text
        assert "## Pages\n\n" in text
        assert "- [Home](https://example.com)" in text
        assert "- [About](https://example.com/about)" in text
        assert "- [Getting Started](https://example.com/docs/getting-started)" in text

    def test_title_and_summary(self):
        """Test configured title, summary and description."""
        text = make_generator(
            title="Acme Docs",
            summary="Everything about Acme.",
            description=["First paragraph.", "Second paragraph."],
        ).generate([])

        assert text.startswith("# Acme Docs\n\n> Everything about Acme.\n\n")
        assert "First paragraph.\n\nSecond paragraph.\n" in text

    def test_curated_sections(self):
        """Test curated sections with plain and described links."""
        text = make_generator(
            sections={
                "Docs": [
                    "/docs/install",
                    LinkEntry(url="https://other.example/guide", description="External guide"),
                ]
            }
        ).generate([])

        assert "## Docs\n\n- [Install](https://example.com/docs/install)\n" in text
        assert "- [External guide](https://other.example/guide)" in text

    def test_route_filtering(self):
        """Test that parameterized, excluded, internal and non-GET routes are dropped."""
        routes = [
            "pricing",
            "posts/{slug}",
            "admin/dashboard",
            "_debugbar/open",
            "up",
            "sitemap.xml",
            "pricing.md",
            RouteInfo("contact", methods=("POST",)),
            RouteInfo("pricing", methods=("GET", "HEAD")),
        ]

        assert make_generator().eligible_routes(routes) == ["pricing"]

    def test_upload_is_not_health_check(self):
        """Test that only the exact 'up' route is treated as internal."""
        assert make_generator().eligible_routes(["upload", "up"]) == ["upload"]

    def test_auto_section_disabled(self):
        """Test that the auto section can be turned off."""
        text = make_generator(auto_section=AutoSectionConfig(enabled=False)).generate(["about"])

        assert "## Pages" not in text

    def test_auto_section_in_optional(self):
        """Test nesting the auto section under Optional."""
        text = make_generator(auto_section=AutoSectionConfig(include_in_optional=True)).generate(["about"])

        assert "## Optional\n\n### Pages\n\n- [About](https://example.com/about)" in text

    def test_optional_section(self):
        """Test the trailing optional section."""
        text = make_generator(
            optional_section=OptionalSectionConfig(enabled=True, title="Extras", content=["/changelog"])
        ).generate([])

        assert text.rstrip().endswith("## Extras\n\n- [Changelog](https://example.com/changelog)")

    def test_generate_cached(self):
        """Test that the cached document is reused."""
        generator = make_generator()
        cache = MemoryCache()

        first = generator.generate_cached(cache, ["about"])
        second = generator.generate_cached(cache, ["about", "pricing"])

        assert first == second
        assert cache.get("llm_ready:sitemap") == first
