"""HTTP method extraction from handler source text."""

import re

from api_scanner.parser.base import HTTP_METHODS


def _signatures(method: str) -> tuple[re.Pattern, ...]:
    # "export" is matched case-insensitively, the verb itself is exact
    return (
        re.compile(rf"(?i:export)\s+(?:(?i:async)\s+)?function\s+{method}\s*[(<]"),
        re.compile(rf"(?i:export)\s+const\s+{method}\s*(?::[^=\n]+)?="),
        re.compile(rf"(?i:export)\s*\{{[^}}]*?(?<![\w$]){method}(?![\w$])(?!\s+as\b)[^}}]*\}}"),
    )


def extract_http_methods(content: str) -> list[str]:
    """Return the HTTP verbs the file exports as handlers, in canonical order."""
    methods = []
    for method in HTTP_METHODS:
        if find_handler_offset(content, method) is not None:
            methods.append(method)
    return methods


def find_handler_offset(content: str, method: str) -> int | None:
    """Source offset of the earliest handler signature for method, if any."""
    offsets = []
    for pattern in _signatures(method):
        match = pattern.search(content)
        if match:
            offsets.append(match.start())
    return min(offsets) if offsets else None
