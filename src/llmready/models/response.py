"""Plain data carriers passed into the conversion service."""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass
class SourceResponse:
    """
    The HTML response a markdown document is generated from.

    Attributes:
        status_code: HTTP status of the original response
        body: Response body (bytes are decoded as UTF-8)
        content_type: Content-Type header, if known
    """

    status_code: int = 200
    body: Optional[Union[bytes, str]] = None
    content_type: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    def text(self) -> str:
        """Return the body as text ('' when there is none)."""
        if self.body is None:
            return ""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors="replace")
        return self.body


@dataclass(frozen=True)
class RouteInfo:
    """A route of the host application, as listed in llms.txt."""

    uri: str
    methods: tuple[str, ...] = field(default=("GET", "HEAD"))
