"""Scan orchestrator — turns a route tree into a Documentation model."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, Field

from api_scanner.errors import ScanError, ScanPathNotFoundError
from api_scanner.parser.base import Documentation, DocumentationInfo, Endpoint, ParsedRoute, RouteFile
from api_scanner.parser.endpoint import parse_endpoint
from api_scanner.parser.locator import DEFAULT_IGNORE, file_path_to_url, find_route_files
from api_scanner.parser.methods import extract_http_methods

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path("src/app/api")


class ScanOptions(BaseModel):
    """What to scan and how to label the result."""

    root_path: Path = DEFAULT_PATH
    ignore: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE))
    info: DocumentationInfo = Field(default_factory=DocumentationInfo)
    login_endpoint: str | None = None
    workers: int = 1


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def display_path(path: Path) -> str:
    """Path relative to the working directory when possible, POSIX separators."""
    try:
        return path.resolve().relative_to(Path.cwd().resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def read_route_file(path: Path) -> RouteFile | None:
    try:
        return RouteFile(path=display_path(path), content=path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Skipping unreadable route file %s: %s", path, e)
        return None


def parse_route_file(path: Path, root: Path) -> list[ParsedRoute]:
    """Read one handler file and split it into one route per exported verb."""
    route_file = read_route_file(path)
    if route_file is None:
        return []

    methods = extract_http_methods(route_file.content)
    if not methods:
        logger.debug("No handler exports in %s", route_file.path)
        return []

    url = file_path_to_url(route_file.path, display_path(root))
    return [
        ParsedRoute(method=method, url=url, file=route_file.path, content=route_file.content)
        for method in methods
    ]


def build_endpoints(routes: list[ParsedRoute], login_endpoint: str | None = None) -> list[Endpoint]:
    endpoints = []
    for route in routes:
        try:
            endpoints.append(parse_endpoint(route, login_endpoint))
        except Exception:
            logger.warning("Skipping %s %s from %s", route.method, route.url, route.file, exc_info=True)
    return endpoints


def _routes_for(path: Path, root: Path, login_endpoint: str | None) -> list[Endpoint]:
    return build_endpoints(parse_route_file(path, root), login_endpoint)


def scan(options: ScanOptions | None = None, clock: Callable[[], str] = utc_now) -> Documentation:
    """Scan the route tree and return the documentation model.

    Raises ScanPathNotFoundError when the root is missing and ScanError
    when the tree cannot be walked. Anything wrong with a single file or
    route is logged and skipped.
    """
    options = options or ScanOptions()
    root = options.root_path
    if not root.exists():
        raise ScanPathNotFoundError(root)

    logger.info("Scanning API routes in: %s", root)
    files = find_route_files(root, options.ignore)
    logger.info("Found %d route files", len(files))

    try:
        if options.workers > 1:
            with ThreadPoolExecutor(max_workers=options.workers) as pool:
                per_file = list(pool.map(lambda p: _routes_for(p, root, options.login_endpoint), files))
        else:
            per_file = [_routes_for(p, root, options.login_endpoint) for p in files]
    except Exception as e:
        raise ScanError(f"Scan of {root} failed: {e}") from e

    endpoints = [endpoint for group in per_file for endpoint in group]
    logger.info("Found %d API endpoints", len(endpoints))

    return Documentation(
        info=options.info,
        endpoints=endpoints,
        total_endpoints=len(endpoints),
        generated_at=clock(),
    )
