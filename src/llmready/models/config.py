"""Pydantic configuration models for llmready."""

from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

DEFAULT_CONTENT_SELECTORS = [
    "main",
    "article",
    '[role="main"]',
    ".content",
    ".post-content",
    ".entry-content",
    "#content",
    "#main-content",
]

DEFAULT_IGNORE_SELECTORS = [
    "nav",
    "header",
    "footer",
    "aside",
    ".sidebar",
    ".navigation",
    ".menu",
    ".breadcrumb",
    ".breadcrumbs",
    ".advertisement",
    ".ad",
    ".ads",
    ".comments",
    ".comment-form",
    ".social-share",
    ".related-posts",
    "script",
    "style",
    "noscript",
    "iframe",
    "form",
    "button",
    '[role="navigation"]',
    '[role="banner"]',
    '[role="contentinfo"]',
    '[aria-hidden="true"]',
]

DEFAULT_EYEBROW_SELECTORS = [
    ".eyebrow",
    ".overline",
    ".kicker",
    ".super-title",
    ".pre-title",
    ".pre-heading",
    ".subtitle",
    ".tagline",
    '[class*="eyebrow"]',
    '[class*="overline"]',
    '[class*="kicker"]',
]

DEFAULT_EXCLUDE_PATTERNS = [
    "/admin/*",
    "/api/*",
    "/livewire/*",
    "/_ignition/*",
    "/telescope/*",
    "/horizon/*",
    "/pulse/*",
    "*/login",
    "*/logout",
    "*/register",
    "*/password/*",
]

Scalar = Union[str, int, float, bool, None]


class ByteSize(int):
    """
    Custom type that parses human-readable byte sizes.

    Accepts:
        - Integers (bytes)
        - Strings like '200kb', '1mb', '5gb'

    Examples:
        >>> ByteSize._parse('200kb')
        204800
        >>> ByteSize._parse('1mb')
        1048576
        >>> ByteSize._parse(1024)
        1024
    """

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> Any:
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(cls._parse)

    @classmethod
    def _parse(cls, v: Any) -> int:
        if isinstance(v, int) and not isinstance(v, bool):
            return v
        if isinstance(v, str):
            v = v.lower().strip()
            # Order matters: check longer suffixes first
            units = [("gb", 1024**3), ("mb", 1024**2), ("kb", 1024), ("b", 1)]
            for unit, mult in units:
                if v.endswith(unit):
                    num_str = v[: -len(unit)].strip()
                    try:
                        return int(float(num_str) * mult)
                    except ValueError as err:
                        raise ValueError(f"Invalid number in byte size: {v}") from err
            try:
                return int(v)
            except ValueError:
                pass
        raise ValueError(f"Invalid byte size: {v}. Use format like '200kb', '1mb', or integer bytes.")


class CacheConfig(BaseModel):
    """Configuration for caching converted pages."""

    enabled: bool = Field(True, description="Cache converted markdown pages")
    ttl_minutes: int = Field(1440, ge=1, description="Minutes before a cached page expires")
    prefix: str = Field("llm_ready", min_length=1, description="Prefix for cache keys")
    directory: Optional[Path] = Field(
        None,
        description="Directory for the file cache (None = in-memory cache)",
    )
    max_entries: Optional[int] = Field(
        10_000,
        ge=1,
        description="Most pages the in-memory cache holds before evicting the oldest (None = unbounded)",
    )

    model_config = {"extra": "forbid"}


class FrontmatterConfig(BaseModel):
    """Configuration for the YAML frontmatter block."""

    include_title: bool = Field(True, description="Add the page title")
    include_description: bool = Field(True, description="Add the meta description")
    include_url: bool = Field(True, description="Add the canonical page URL")
    include_last_modified: bool = Field(True, description="Add the conversion timestamp")
    custom_fields: dict[str, Scalar] = Field(
        default_factory=dict,
        description="Extra fields appended in insertion order",
    )

    model_config = {"extra": "forbid"}


class LinkEntry(BaseModel):
    """A curated link in an llms.txt section."""

    url: str
    description: Optional[str] = None

    model_config = {"extra": "forbid"}


class AutoSectionConfig(BaseModel):
    """Auto-generated llms.txt section listing eligible routes."""

    enabled: bool = True
    title: str = "Pages"
    include_in_optional: bool = Field(False, description="Nest the section under '## Optional'")

    model_config = {"extra": "forbid"}


class OptionalSectionConfig(BaseModel):
    """Trailing llms.txt section that consumers may skip."""

    enabled: bool = False
    title: str = "Optional"
    content: list[Union[str, LinkEntry]] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


class LlmsTxtConfig(BaseModel):
    """Configuration for the /llms.txt document (see llmstxt.org)."""

    enabled: bool = True
    cache_ttl_minutes: int = Field(60, ge=1)
    title: Optional[str] = Field(None, description="H1 title (defaults to the site name)")
    summary: Optional[str] = Field(None, description="Blockquote summary")
    description: list[str] = Field(default_factory=list, description="Description paragraphs")
    sections: dict[str, list[Union[str, LinkEntry]]] = Field(
        default_factory=dict,
        description="Curated sections: H2 title -> links",
    )
    auto_section: AutoSectionConfig = Field(default_factory=AutoSectionConfig)
    optional_section: OptionalSectionConfig = Field(default_factory=OptionalSectionConfig)

    model_config = {"extra": "forbid"}


class DiscoveryConfig(BaseModel):
    """Configuration for advertising markdown alternates."""

    link_header: bool = Field(True, description="Emit a Link header pointing at the .md URL")

    model_config = {"extra": "forbid"}


class ConverterConfig(BaseModel):
    """Configuration for the HTML to Markdown converter."""

    table_support: bool = Field(True, description="Render tables as GFM tables")

    model_config = {"extra": "forbid"}


class LimitsConfig(BaseModel):
    """Resource ceilings for a single conversion."""

    max_input_bytes: Optional[ByteSize] = Field(
        ByteSize(5 * 1024**2),
        description="Largest HTML body converted (e.g., '5mb'; None = unlimited)",
    )

    model_config = {"extra": "forbid"}


class LlmReadyConfig(BaseModel):
    """
    Root configuration model for llmready.

    Example:
        config = LlmReadyConfig(
            content_selectors=["article", "main"],
            cache=CacheConfig(enabled=False),
        )

    YAML format:
        content_selectors:
          - article
          - main
        cache:
          ttl_minutes: 60
        frontmatter:
          custom_fields:
            site_name: Example
    """

    enabled: bool = Field(True, description="Serve markdown alternates at all")
    cache: CacheConfig = Field(default_factory=CacheConfig)

    content_selectors: list[str] = Field(default_factory=lambda: list(DEFAULT_CONTENT_SELECTORS))
    ignore_selectors: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_SELECTORS))
    eyebrow_selectors: list[str] = Field(default_factory=lambda: list(DEFAULT_EYEBROW_SELECTORS))
    eyebrow_auto_detect: bool = Field(True, description="Detect eyebrow labels heuristically")
    exclude_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))

    llms_txt: LlmsTxtConfig = Field(default_factory=LlmsTxtConfig)
    frontmatter: FrontmatterConfig = Field(default_factory=FrontmatterConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    converter: ConverterConfig = Field(default_factory=ConverterConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)

    extractor: Literal["default", "fallback"] = Field(
        "default",
        description="Content extraction strategy",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.safe_dump(
            self.model_dump(mode="json"),
            default_flow_style=False,
            sort_keys=False,
        )

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "LlmReadyConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "LlmReadyConfig":
        """Load config from YAML file."""
        return cls.from_yaml(Path(path).read_text(encoding="utf-8"))
