"""Sea-Style client config. Defaults from Settings (SEASTYLE_ORIGIN, SEASTYLE_API_BASE, ...) or SeaStyleConfig args."""
from typing import Any, Mapping
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

from seastyle.config import settings


def _is_relay(url: str) -> bool:
    """A relay takes the upstream path as ?path= instead of in its own path."""
    parts = urlsplit(url)
    if "path" in dict(parse_qsl(parts.query)):
        return True
    pathname = parts.path or ""
    return "/api/proxy" in pathname or pathname.endswith("/proxy")


class SeaStyleConfig:
    """Origin, optional relay base, timeout and headers for one client."""

    __slots__ = ("origin", "api_base", "timeout", "user_agent")

    def __init__(
        self,
        *,
        origin: str | None = None,
        api_base: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.origin = (origin or settings.seastyle_origin).strip().rstrip("/")
        base = (api_base if api_base is not None else settings.seastyle_api_base).strip()
        # relative relay bases ("/api/proxy") resolve against the origin
        self.api_base = urljoin(self.origin + "/", base) if base else ""
        self.timeout = timeout or settings.seastyle_timeout_seconds
        self.user_agent = user_agent or settings.seastyle_user_agent

    @property
    def base_url(self) -> str:
        return self.api_base or self.origin

    def uses_relay(self) -> bool:
        return bool(self.api_base) and _is_relay(self.api_base)

    def build_url(self, target_path: str, params: Mapping[str, Any] | None = None) -> str:
        """Absolute URL for an upstream path, addressed directly or through the relay."""
        query = {k: str(v) for k, v in (params or {}).items() if v is not None}
        target = f"{target_path}?{urlencode(query)}" if query else target_path
        if self.uses_relay():
            parts = urlsplit(self.api_base)
            relay_query = dict(parse_qsl(parts.query))
            relay_query["path"] = target
            return urlunsplit(parts._replace(query=urlencode(relay_query)))
        return urljoin(self.base_url + "/", target)

    def headers(self, *, json_body: bool = False) -> dict[str, str]:
        h = {
            "User-Agent": self.user_agent,
            "Accept": "application/json, text/html;q=0.9, */*;q=0.8",
            "Origin": self.origin,
            "Referer": self.origin + "/",
        }
        if json_body:
            h["Content-Type"] = "application/json"
        return h
