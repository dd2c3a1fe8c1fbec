"""Endpoint assembly — runs every field extractor for one (file, verb) pair.

Each extractor is isolated: if it raises, the field falls back to its
default and the rest of the endpoint is still built.
"""

import logging
from typing import Callable, TypeVar

from api_scanner.parser.auth import extract_authentication
from api_scanner.parser.base import AuthSpec, Endpoint, ParsedRoute, RouteContext
from api_scanner.parser.body import extract_request_body
from api_scanner.parser.docs import extract_title, synthesize_title
from api_scanner.parser.headers import extract_request_headers
from api_scanner.parser.locator import extract_tags
from api_scanner.parser.methods import find_handler_offset
from api_scanner.parser.params import extract_parameters, extract_path_parameters
from api_scanner.parser.responses import extract_responses
from api_scanner.parser.sections import handler_source

logger = logging.getLogger(__name__)

T = TypeVar("T")

NO_AUTH = AuthSpec(auth_type="none", required=False, description="No authentication required")


def _safely(extractor: Callable[[RouteContext], T], ctx: RouteContext, default: Callable[[], T]) -> T:
    try:
        return extractor(ctx)
    except Exception:
        logger.debug("%s failed for %s %s", extractor.__name__, ctx.method, ctx.url, exc_info=True)
        return default()


def _tags(ctx: RouteContext) -> list[str]:
    return extract_tags(ctx.file)


def build_context(route: ParsedRoute, login_endpoint: str | None = None) -> RouteContext:
    extra = {"login_endpoint": login_endpoint} if login_endpoint else {}
    return RouteContext(
        method=route.method,
        url=route.url,
        file=route.file,
        content=route.content,
        section=handler_source(route.content, route.method),
        handler_offset=find_handler_offset(route.content, route.method),
        **extra,
    )


def parse_endpoint(route: ParsedRoute, login_endpoint: str | None = None) -> Endpoint:
    """Infer every optional field of an endpoint from its route source."""
    ctx = build_context(route, login_endpoint)

    title, description = _safely(extract_title, ctx, lambda: synthesize_title(ctx))
    authentication = _safely(extract_authentication, ctx, lambda: NO_AUTH)

    return Endpoint(
        method=route.method,
        url=route.url,
        file=route.file,
        title=title,
        description=description,
        summary=title,
        parameters=_safely(extract_parameters, ctx, lambda: extract_path_parameters(ctx.url)),
        responses=_safely(extract_responses, ctx, dict),
        request_headers=_safely(extract_request_headers, ctx, lambda: None),
        request_body=_safely(extract_request_body, ctx, lambda: None),
        tags=_safely(_tags, ctx, list),
        requires_auth=authentication.required,
        authentication=authentication,
    )
