"""Generation of the /llms.txt index (https://llmstxt.org)."""

from collections.abc import Iterable
from typing import Optional, Union

from .cache.manager import CacheStore, llms_txt_cache_key
from .models.config import LinkEntry, LlmReadyConfig
from .models.response import RouteInfo
from .routing.filters import RouteFilter

INTERNAL_PREFIXES = (
    "_ignition",
    "_debugbar",
    "sanctum",
    "livewire",
    "llms.txt",
)

STATIC_FILES = (
    "robots.txt",
    "sitemap.xml",
    "sitemap.txt",
    "favicon.ico",
    "manifest.json",
    "browserconfig.xml",
    "ads.txt",
    "security.txt",
    ".well-known",
)

Link = Union[str, LinkEntry]


def format_label(slug: str) -> str:
    """Turn a URL slug into a title-cased label ('getting-started' -> 'Getting Started')."""
    words = slug.replace("-", " ").replace("_", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def route_to_label(uri: str) -> str:
    segments = [part for part in uri.strip("/").split("/") if part]
    if not segments:
        return "Home"
    return format_label(segments[-1])


def url_to_label(url: str) -> str:
    if url.endswith(".md"):
        url = url[:-3]
    return route_to_label(url)


class LlmsTxtGenerator:
    """
    Builds the llms.txt document listing the site's markdown pages.

    Layout: H1 title, optional blockquote summary, a usage note, description
    paragraphs, curated sections, an auto-generated section of eligible
    routes, and an optional trailing section.

    Example:
        generator = LlmsTxtGenerator(config, base_url="https://example.com", site_name="Example")
        text = generator.generate([RouteInfo("/"), RouteInfo("docs/intro")])
    """

    def __init__(
        self,
        config: LlmReadyConfig,
        base_url: str,
        site_name: str = "Website",
        route_filter: Optional[RouteFilter] = None,
    ):
        """
        Initialize the generator.

        Args:
            config: Configuration (uses the llms_txt section and exclude patterns)
            base_url: Absolute site URL used to build links
            site_name: Title fallback when llms_txt.title is unset
            route_filter: Route filter (built from config.exclude_patterns if None)
        """
        self._config = config
        self._settings = config.llms_txt
        self.base_url = base_url.rstrip("/")
        self.site_name = site_name
        self._route_filter = route_filter or RouteFilter(config.exclude_patterns)

    def generate(self, routes: Iterable[Union[RouteInfo, str]] = ()) -> str:
        """
        Generate the llms.txt content.

        Args:
            routes: Application routes (RouteInfo or bare GET URIs)

        Returns:
            llms.txt document
        """
        settings = self._settings
        lines = [f"# {settings.title or self.site_name}", ""]

        if settings.summary:
            lines += [f"> {settings.summary}", ""]

        lines += [
            "All pages on this site are available in markdown format for LLM consumption.",
            "Append `.md` to any URL or add `?format=md` to get the markdown version.",
            "",
        ]

        for paragraph in settings.description:
            lines += [paragraph, ""]

        for section_title, links in settings.sections.items():
            lines += [f"## {section_title}", ""]
            lines += self._format_links(links)
            lines.append("")

        auto_section = settings.auto_section
        if auto_section.enabled:
            eligible = self.eligible_routes(routes)
            if eligible:
                if auto_section.include_in_optional:
                    lines += ["## Optional", "", f"### {auto_section.title}"]
                else:
                    lines.append(f"## {auto_section.title}")
                lines.append("")

                for uri in eligible:
                    lines.append(f"- [{route_to_label(uri)}]({self._route_url(uri)})")
                lines.append("")

        optional_section = settings.optional_section
        if optional_section.enabled and optional_section.content:
            lines += [f"## {optional_section.title}", ""]
            lines += self._format_links(optional_section.content)
            lines.append("")

        return "\n".join(lines)

    def generate_cached(self, cache: CacheStore, routes: Iterable[Union[RouteInfo, str]] = ()) -> str:
        """Like generate(), reusing the cached document while it is fresh."""
        key = llms_txt_cache_key(self._config.cache.prefix)
        cached = cache.get(key)
        if cached is not None:
            return cached

        content = self.generate(routes)
        cache.put(key, content, self._settings.cache_ttl_minutes)
        return content

    def eligible_routes(self, routes: Iterable[Union[RouteInfo, str]]) -> list[str]:
        """
        Filter routes down to the static GET pages worth listing.

        Returns:
            Sorted, de-duplicated route URIs
        """
        eligible = set()
        for route in routes:
            if isinstance(route, str):
                route = RouteInfo(route)

            if "GET" not in (method.upper() for method in route.methods):
                continue

            uri = route.uri.strip("/")

            if "{" in uri:
                continue

            if self._route_filter.should_exclude("/" + uri):
                continue

            if self._is_internal(uri):
                continue

            eligible.add(uri)

        return sorted(eligible)

    def _route_url(self, uri: str) -> str:
        url = f"{self.base_url}/{uri}".rstrip("/")
        return url or self.base_url

    def _normalize_url(self, url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        return f"{self.base_url}/{url.lstrip('/')}"

    def _format_links(self, links: Iterable[Link]) -> list[str]:
        formatted = []
        for link in links:
            if isinstance(link, str):
                url, label = link, url_to_label(link)
            else:
                url, label = link.url, link.description or url_to_label(link.url)
            formatted.append(f"- [{label}]({self._normalize_url(url)})")
        return formatted

    @staticmethod
    def _is_internal(uri: str) -> bool:
        # "up" is the health check route
        if uri == "up" or uri.startswith(INTERNAL_PREFIXES):
            return True
        if uri.endswith(".md"):
            return True
        return uri.startswith(STATIC_FILES)
