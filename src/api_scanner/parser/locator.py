"""Route locator — finds handler files and maps their paths to URL templates."""

import fnmatch
import re
from pathlib import Path

from api_scanner.errors import ScanError
from api_scanner.parser.base import API_ROOT

HANDLER_NAMES = ("route.ts", "route.js", "route.tsx", "route.jsx")

DEFAULT_IGNORE = ["**/node_modules/**", "**/dist/**", "**/.next/**"]

_ANCHOR = re.compile(r"^.*?(?:^|/)app/api(?:/|$)")
_TEMPLATE_PREFIX = re.compile(r"^/?api(?:/|$)")
_HANDLER_SUFFIX = re.compile(r"(?:^|/)route\.(?:ts|js|tsx|jsx)$")
_INDEX_SUFFIX = re.compile(r"(?:^|/)index$")
_DYNAMIC_SEGMENT = re.compile(r"\[\[?(?:\.\.\.)?([^\[\]/]+?)\]?\]")


def find_route_files(root: Path, ignore: list[str] | None = None) -> list[Path]:
    """Return every handler file under root, sorted by POSIX path."""
    patterns = DEFAULT_IGNORE if ignore is None else ignore
    try:
        candidates = [p for p in root.rglob("route.*") if p.name in HANDLER_NAMES and p.is_file()]
    except OSError as e:
        raise ScanError(f"Failed to list route files in {root}: {e}") from e

    files = [p for p in candidates if not _is_ignored(p, root, patterns)]
    return sorted(files, key=lambda p: p.as_posix())


def _is_ignored(path: Path, root: Path, patterns: list[str]) -> bool:
    absolute = path.resolve().as_posix()
    try:
        relative = path.relative_to(root).as_posix()
    except ValueError:
        relative = absolute
    return any(
        fnmatch.fnmatchcase(absolute, pattern) or fnmatch.fnmatchcase(relative, pattern)
        for pattern in patterns
    )


def normalize_path(path: str | Path) -> str:
    return str(path).replace("\\", "/")


def file_path_to_url(file_path: str | Path, root: str | Path | None = None) -> str:
    """Convert a handler file path into a canonical URL template.

    ``src/app/api/users/[id]/route.ts`` becomes ``/api/users/{id}``.
    Already-converted templates map to themselves.
    """
    url = normalize_path(file_path)

    anchored = _ANCHOR.sub("", url, count=1)
    if anchored != url:
        url = anchored
    elif _TEMPLATE_PREFIX.match(url):
        url = _TEMPLATE_PREFIX.sub("", url, count=1)
    elif root is not None:
        prefix = normalize_path(root).rstrip("/") + "/"
        if url.startswith(prefix):
            url = url[len(prefix):]

    url = _HANDLER_SUFFIX.sub("", url)
    url = _INDEX_SUFFIX.sub("", url)
    segments = [s for s in url.split("/") if s and s != "." and not _is_route_group(s)]
    url = "/".join(_DYNAMIC_SEGMENT.sub(r"{\1}", s) for s in segments)

    return f"{API_ROOT}/{url}" if url else API_ROOT


def extract_tags(file_path: str | Path) -> list[str]:
    """Use the first directory after the API root as the endpoint's tag."""
    parts = [p for p in normalize_path(file_path).split("/") if p]

    api_index = -1
    for i, part in enumerate(parts):
        if part == "api" and i > 0 and parts[i - 1] == "app":
            api_index = i
            break
    if api_index == -1 and "api" in parts:
        api_index = parts.index("api")
    if api_index == -1:
        return []

    for part in parts[api_index + 1:]:
        if part in HANDLER_NAMES:
            return []
        if not _is_route_group(part):
            return [part]
    return []


def _is_route_group(segment: str) -> bool:
    return segment.startswith("(") and segment.endswith(")")
