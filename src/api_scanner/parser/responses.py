"""Response inference: literal payloads, method defaults and @response annotations."""

import json
import re
from http import HTTPStatus

from api_scanner.parser.base import ResponseSpec, RouteContext
from api_scanner.parser.catalog import lookup_payload

_RESPONSE_CALL = re.compile(
    r"\b(?:NextResponse|Response|res(?:\.status\(\s*(\d{3})\s*\))?)\.json\(\s*"
    r"(\{[^{}]*\}|[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*)"
    r"(?:\s*,\s*\{[^{}]*?\bstatus\s*:\s*(\d{3})[^{}]*\})?"
)
_RESPONSE_ANNOTATION = re.compile(r"@response\s+(\d{3})\s+([^\n]+)", re.IGNORECASE)
_INLINE_JSON = re.compile(r"\{.*\}")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")

REQUIRED_FIELD_WORDS = ("id", "createdAt", "updatedAt", "status")
OPTIONAL_FIELD_WORDS = ("description", "notes", "tags", "metadata")

DESCRIPTIONS = {
    "200": "Success",
    "201": "Created",
    "204": "No content",
    "400": "Bad request",
    "401": "Unauthorized",
    "403": "Forbidden",
    "404": "Not found",
    "500": "Internal server error",
}


def describe_status(status_code: str) -> str:
    if status_code in DESCRIPTIONS:
        return DESCRIPTIONS[status_code]
    try:
        return HTTPStatus(int(status_code)).phrase
    except ValueError:
        return "Response"


def payload_names(payload: str) -> list[str]:
    """Names a response payload refers to: object keys, values, or the variable."""
    if not payload.startswith("{"):
        return [payload.split(".")[-1]]
    names = []
    for item in payload.strip("{} \n").split(","):
        item = item.strip()
        if not item or item.startswith("..."):
            continue
        key, _, value = item.partition(":")
        for name in (key.strip().strip("'\""), value.strip()):
            if _IDENTIFIER.match(name) and name not in names:
                names.append(name)
    return names


def detect_literal_response(ctx: RouteContext) -> dict[str, ResponseSpec] | None:
    for match in _RESPONSE_CALL.finditer(ctx.source):
        status = match.group(1) or match.group(3) or "200"
        if not status.startswith("2"):
            continue
        example = lookup_payload(payload_names(match.group(2)))
        if example is not None:
            return {status: ResponseSpec(status_code=status, description=describe_status(status), example=example)}
    return None


def default_responses(ctx: RouteContext) -> dict[str, ResponseSpec]:
    not_found = ResponseSpec(status_code="404", description="Not found", example={"error": "Resource not found"})
    if ctx.method == "GET":
        return {
            "200": ResponseSpec(status_code="200", description="Success", example={"data": []}),
            "404": not_found,
        }
    if ctx.method in ("POST", "PUT", "PATCH"):
        return {
            "200": ResponseSpec(status_code="200", description="Success", example={"success": True}),
            "201": ResponseSpec(status_code="201", description="Created", example={"id": "123", "success": True}),
            "400": ResponseSpec(status_code="400", description="Bad request", example={"error": "Invalid input"}),
        }
    if ctx.method == "DELETE":
        return {
            "200": ResponseSpec(status_code="200", description="Success", example={"success": True}),
            "404": not_found,
        }
    return {}


RESPONSE_STRATEGIES = (
    detect_literal_response,
    default_responses,
)


def parse_response_annotation(status_code: str, text: str) -> ResponseSpec:
    """Split ``description {json}`` into description and example.

    Malformed JSON leaves the whole text as the description.
    """
    full = text.strip()
    if full.endswith("*/"):
        full = full[:-2].rstrip()

    match = _INLINE_JSON.search(full)
    if match:
        try:
            example = json.loads(match.group(0))
        except json.JSONDecodeError:
            return ResponseSpec(status_code=status_code, description=full)
        description = (full[:match.start()] + full[match.end():]).strip()
        return ResponseSpec(
            status_code=status_code,
            description=description or describe_status(status_code),
            example=example,
        )
    return ResponseSpec(status_code=status_code, description=full)


def annotated_responses(content: str) -> dict[str, ResponseSpec]:
    responses = {}
    for status_code, text in _RESPONSE_ANNOTATION.findall(content):
        responses[status_code] = parse_response_annotation(status_code, text)
    return responses


def response_field_names(content: str) -> tuple[list[str], list[str]]:
    required = [w for w in REQUIRED_FIELD_WORDS if re.search(rf"\b{w}\b", content)]
    optional = [w for w in OPTIONAL_FIELD_WORDS if re.search(rf"\b{w}\b", content)]
    return required, optional


def extract_responses(ctx: RouteContext) -> dict[str, ResponseSpec]:
    responses: dict[str, ResponseSpec] = {}
    for strategy in RESPONSE_STRATEGIES:
        found = strategy(ctx)
        if found is not None:
            responses = dict(found)
            break
    responses.update(annotated_responses(ctx.source))

    required, optional = response_field_names(ctx.source)
    return {
        code: spec.model_copy(update={"required_fields": list(required), "optional_fields": list(optional)})
        for code, spec in responses.items()
    }
