from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from .config import GatewayConfig

HEALTH_SUFFIX = "/health"


@dataclass(frozen=True)
class BackendRoute:
    method: str
    path: str
    hostname: str
    endpoint: str = ""


@dataclass(frozen=True)
class RouteFilter:
    include_health: bool = False
    service: str = ""

    def wants_service(self, hostname: str) -> bool:
        return not self.service or hostname == self.service.lower()


@dataclass(frozen=True)
class RouteExtraction:
    routes: tuple[BackendRoute, ...]
    health_skipped: int = 0


def extract_hostname(host: str) -> str:
    """Return the network hostname of a backend host entry, or ""."""
    candidate = host.strip()
    if not candidate:
        return ""
    if "://" not in candidate:
        candidate = f"//{candidate}"
    try:
        return urlsplit(candidate).hostname or ""
    except ValueError:
        return ""


def extract_routes(config: GatewayConfig, route_filter: RouteFilter | None = None) -> RouteExtraction:
    route_filter = route_filter or RouteFilter()
    routes: list[BackendRoute] = []
    health_skipped = 0
    for endpoint in config.endpoints:
        for backend in endpoint.backends:
            hostname = extract_hostname(backend.host[0]) if backend.host else ""
            if not route_filter.wants_service(hostname):
                continue
            if not route_filter.include_health and backend.url_pattern.endswith(HEALTH_SUFFIX):
                health_skipped += 1
                continue
            routes.append(
                BackendRoute(
                    method=(backend.method or endpoint.method).upper(),
                    path=backend.url_pattern,
                    hostname=hostname,
                    endpoint=endpoint.path,
                )
            )
    return RouteExtraction(routes=tuple(routes), health_skipped=health_skipped)
