"""Path, query and body parameter inference."""

import re

from api_scanner.parser.base import Parameter, RouteContext

_PATH_PARAM = re.compile(r"\{([^}]+)\}")
_PARAM_ANNOTATION = re.compile(
    r"@param\s+\{([^}]+)\}\s+(\[)?(?:(query|body)\.)?(\w+)\]?(?:\s+-)?[ \t]+([^\n]+)",
    re.IGNORECASE,
)

QUERY_MARKERS = (
    re.compile(r"searchParams"),
    re.compile(r"URLSearchParams"),
    re.compile(r"\bquery\s*:\s*\{", re.IGNORECASE),
    re.compile(r"\breq(?:uest)?\.query\b"),
)

BODY_MARKERS = (
    re.compile(r"\bbody\s*:\s*\{", re.IGNORECASE),
    re.compile(r"\brequest\s*:\s*(?:Next)?Request\b"),
    re.compile(r"await\s+\w+\.json\(\s*\)"),
)

BODY_PARAM_METHODS = ("POST", "PUT", "PATCH")

# names used for the handler's own arguments, not request parameters
HANDLER_ARGUMENTS = {"request", "req", "res", "response", "context", "ctx", "params"}


def extract_path_parameters(url: str) -> list[Parameter]:
    return [
        Parameter(
            name=name,
            param_type="string",
            required=True,
            location="path",
            description=f"Path parameter: {name}",
        )
        for name in _PATH_PARAM.findall(url)
    ]


def extract_annotated_parameters(content: str, location: str, default_location: str) -> list[Parameter]:
    """Parameters documented as ``@param {type} name description``.

    A ``query.`` or ``body.`` prefix on the name picks the location;
    unprefixed annotations go to ``default_location``.
    """
    parameters = []
    for match in _PARAM_ANNOTATION.finditer(content):
        raw_type, bracketed, prefix, name, description = match.groups()
        if name.lower() in HANDLER_ARGUMENTS:
            continue
        target = prefix.lower() if prefix else default_location
        if target != location:
            continue
        optional = raw_type.strip().endswith("?") or bracketed is not None
        parameters.append(
            Parameter(
                name=name,
                param_type=raw_type.strip().rstrip("?").strip() or "string",
                required=not optional,
                location=location,
                description=description.strip(),
            )
        )
    return parameters


def extract_query_parameters(ctx: RouteContext) -> list[Parameter]:
    if not any(marker.search(ctx.source) for marker in QUERY_MARKERS):
        return []

    default = "body" if ctx.method in BODY_PARAM_METHODS else "query"
    annotated = extract_annotated_parameters(ctx.source, "query", default)
    if annotated:
        return annotated
    return [
        Parameter(
            name="query",
            param_type="object",
            required=False,
            location="query",
            description="Query parameters",
        )
    ]


def extract_body_parameters(ctx: RouteContext) -> list[Parameter]:
    if ctx.method not in BODY_PARAM_METHODS:
        return []
    if not any(marker.search(ctx.source) for marker in BODY_MARKERS):
        return []

    annotated = extract_annotated_parameters(ctx.source, "body", "body")
    if annotated:
        return annotated
    return [
        Parameter(
            name="body",
            param_type="object",
            required=True,
            location="body",
            description="Request body",
        )
    ]


def extract_parameters(ctx: RouteContext) -> list[Parameter]:
    """Path parameters first, then query, then body."""
    parameters = extract_path_parameters(ctx.url)
    parameters.extend(extract_query_parameters(ctx))
    parameters.extend(extract_body_parameters(ctx))
    return parameters
