"""Request header inference."""

import re

from api_scanner.parser.auth import has_auth_markers
from api_scanner.parser.base import RequestHeaderSpec, RouteContext

HEADER_MARKERS = (
    re.compile(r"\bheaders\(\s*\)"),
    re.compile(r"\breq(?:uest)?\.headers\b"),
    re.compile(r"\bheaders\.get\("),
    re.compile(r"\bheaders\s*\["),
)

_INDEXED_HEADER = re.compile(r"\bheaders\s*\[\s*['\"`]([^'\"`]+)['\"`]\s*\]")
_GET_HEADER = re.compile(r"\bheaders(?:\(\s*\))?\.get\(\s*['\"`]([^'\"`]+)['\"`]\s*\)")

COMMON_HEADERS = (
    ("Authorization", "Bearer token for authentication"),
    ("Content-Type", "Media type of the request body"),
    ("Accept", "Media types the client accepts"),
    ("User-Agent", "Client application identifier"),
    ("X-API-Key", "API key for authentication"),
    ("X-Request-ID", "Unique identifier for request tracing"),
)


def extract_request_headers(ctx: RouteContext) -> list[RequestHeaderSpec] | None:
    if not any(marker.search(ctx.source) for marker in HEADER_MARKERS):
        return None

    headers = [RequestHeaderSpec(name=name, required=False, description=desc) for name, desc in COMMON_HEADERS]
    seen = {h.name.lower() for h in headers}
    for pattern in (_INDEXED_HEADER, _GET_HEADER):
        for name in pattern.findall(ctx.source):
            if name.lower() not in seen:
                seen.add(name.lower())
                headers.append(RequestHeaderSpec(name=name, required=False, description=f"Custom header: {name}"))

    if has_auth_markers(ctx.source):
        auth = next((h for h in headers if h.name.lower() == "authorization"), None)
        if auth is None or not auth.required:
            headers = [h for h in headers if h.name.lower() != "authorization"]
            headers.insert(
                0,
                RequestHeaderSpec(name="Authorization", required=True, description="Bearer token for authentication"),
            )
    return headers
