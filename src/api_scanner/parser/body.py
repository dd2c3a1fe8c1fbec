"""Request body inference for mutating handlers.

Strategies run in order and the first one that finds properties wins:
destructuring of a body variable, property access on the parsed JSON,
then local interface/type declarations.
"""

import re

from pydantic import BaseModel, ConfigDict, JsonValue

from api_scanner.parser.base import MUTATING_METHODS, RequestBodySpec, RouteContext

_JSON_CALL = r"await\s+\w+(?:\.\w+)*\.json\(\s*\)"

_BODY_READ = re.compile(_JSON_CALL)
_BODY_DESTRUCTURE = re.compile(r"(?:const|let|var)\s*\{[^}]*\}\s*(?::[^=\n]+)?=\s*body\b")
_BODY_ASSIGNMENT = re.compile(rf"(?:const|let|var)\s+(\w+)\s*(?::[^=\n]+)?=\s*\(?\s*{_JSON_CALL}")
_DESTRUCTURE_FROM = re.compile(r"(?:const|let|var)\s*\{([^{}]*)\}\s*(?::[^=\n]+)?=\s*(\w+)\b(?!\s*[.(\[])")
_DESTRUCTURE_JSON = re.compile(rf"(?:const|let|var)\s*\{{([^{{}}]*)\}}\s*(?::[^=\n]+)?=\s*\(?\s*{_JSON_CALL}")
_TYPE_BLOCK = re.compile(r"(?:interface\s+(\w+)(?:\s+extends\s+[^{]+)?|type\s+(\w+)\s*=)\s*\{([^{}]*)\}")
_FIELD = re.compile(r"^(?:readonly\s+)?['\"]?([\w$]+)['\"]?(\?)?\s*:\s*(.+)$")
_STRING_LITERAL = re.compile(r"""^(['"])(.*)\1$""")

BODY_TYPE_NAME = re.compile(r"(?:Request|Body|Input|Payload|Data|Dto|Params)$")
FLAG_NAMES = {"enabled", "active", "completed", "published", "archived", "done", "verified", "public", "private"}
FLAG_PREFIXES = ("is", "has", "can", "should", "allow", "enable")


class BodyField(BaseModel):
    """One inferred request body property."""

    model_config = ConfigDict(frozen=True)

    name: str
    required: bool
    field_type: str = "string"
    enum: list[str] | None = None


def body_identifiers(content: str) -> set[str]:
    """'body' plus every variable assigned from an awaited .json() call."""
    return {"body"} | set(_BODY_ASSIGNMENT.findall(content))


def parse_type_blocks(content: str) -> list[tuple[str, dict[str, tuple[bool, str]]]]:
    """Return (name, {field: (optional, ts_type)}) for every local interface/type."""
    blocks = []
    for match in _TYPE_BLOCK.finditer(content):
        name = match.group(1) or match.group(2)
        fields = {}
        for piece in re.split(r"[;\n,]", match.group(3)):
            field = _FIELD.match(piece.strip())
            if field:
                fields[field.group(1)] = (field.group(2) is not None, field.group(3).strip())
        if fields:
            blocks.append((name, fields))
    return blocks


def map_ts_type(ts_type: str) -> tuple[str, list[str] | None]:
    """Map a TypeScript type expression to a JSON schema type (and enum)."""
    parts = [p.strip() for p in ts_type.strip().rstrip(";").split("|") if p.strip()]
    parts = [p for p in parts if p not in ("null", "undefined")] or ["string"]

    literals = [_STRING_LITERAL.match(p) for p in parts]
    if all(literals):
        return "string", [m.group(2) for m in literals]

    first = parts[0]
    if first.endswith("[]") or first.startswith("Array<"):
        return "array", None
    lowered = first.lower()
    if lowered in ("number", "bigint"):
        return "number", None
    if lowered == "boolean":
        return "boolean", None
    if lowered == "object" or first.startswith(("Record<", "{")):
        return "object", None
    return "string", None


def example_for_name(name: str) -> JsonValue:
    lowered = name.lower()
    if "email" in lowered:
        return "user@example.com"
    if "password" in lowered:
        return "securePassword123"
    if "title" in lowered:
        return "Example Title"
    if "description" in lowered:
        return "Example description"
    if "name" in lowered:
        return "Example Name"
    if lowered == "id" or name.endswith(("Id", "_id", "ID")):
        return "123"
    if is_flag_name(name):
        return True
    return f"example {name}"


def is_flag_name(name: str) -> bool:
    if name.lower() in FLAG_NAMES:
        return True
    for prefix in FLAG_PREFIXES:
        if name.startswith(prefix) and len(name) > len(prefix) and name[len(prefix)].isupper():
            return True
    return False


def example_for_field(field: BodyField) -> JsonValue:
    if field.enum:
        return field.enum[0]
    if field.field_type == "number":
        return 0
    if field.field_type == "boolean":
        return True
    if field.field_type == "array":
        return []
    if field.field_type == "object":
        return {}
    return example_for_name(field.name)


def parse_destructured(text: str) -> list[tuple[str, bool]]:
    """Split a destructuring pattern into (name, required) pairs."""
    names = []
    for item in text.split(","):
        item = item.strip()
        if not item or item.startswith("..."):
            continue
        match = re.match(r"[\w$]+", item)
        if not match:
            continue
        rest = item[match.end():]
        optional = rest.lstrip().startswith("?") or "=" in rest
        names.append((match.group(0), not optional))
    return names


def _field_types(content: str) -> dict[str, tuple[bool, str]]:
    merged: dict[str, tuple[bool, str]] = {}
    for _, fields in parse_type_blocks(content):
        for name, info in fields.items():
            merged.setdefault(name, info)
    return merged


def fields_from_destructuring(ctx: RouteContext) -> list[BodyField] | None:
    identifiers = body_identifiers(ctx.source)
    declared = _field_types(ctx.content)
    for match in _DESTRUCTURE_FROM.finditer(ctx.source):
        if match.group(2) not in identifiers:
            continue
        fields = []
        for name, required in parse_destructured(match.group(1)):
            field_type, enum = "string", None
            if name in declared:
                optional, ts_type = declared[name]
                field_type, enum = map_ts_type(ts_type)
                required = required and not optional
            fields.append(BodyField(name=name, required=required, field_type=field_type, enum=enum))
        if fields:
            return fields
    return None


def _accessed_field(name: str, required: bool) -> BodyField:
    return BodyField(name=name, required=required, field_type="boolean" if is_flag_name(name) else "string")


def fields_from_property_access(ctx: RouteContext) -> list[BodyField] | None:
    fields: dict[str, BodyField] = {}
    for match in _DESTRUCTURE_JSON.finditer(ctx.source):
        for name, required in parse_destructured(match.group(1)):
            fields.setdefault(name, _accessed_field(name, required))

    identifiers = sorted(body_identifiers(ctx.source))
    access = re.compile(rf"\b(?:{'|'.join(identifiers)})\??\.([A-Za-z_$][\w$]*)\b(?!\s*\()")
    for name in access.findall(ctx.source):
        fields.setdefault(name, _accessed_field(name, False))
    return list(fields.values()) or None


def fields_from_type_declarations(ctx: RouteContext) -> list[BodyField] | None:
    blocks = parse_type_blocks(ctx.content)
    if not blocks:
        return None
    preferred = [b for b in blocks if BODY_TYPE_NAME.search(b[0])]
    _, declared = (preferred or blocks)[0]
    fields = []
    for name, (optional, ts_type) in declared.items():
        field_type, enum = map_ts_type(ts_type)
        fields.append(BodyField(name=name, required=not optional, field_type=field_type, enum=enum))
    return fields


BODY_STRATEGIES = (
    fields_from_destructuring,
    fields_from_property_access,
    fields_from_type_declarations,
)


def build_body_spec(fields: list[BodyField]) -> RequestBodySpec:
    properties: dict[str, JsonValue] = {}
    for field in fields:
        prop: dict[str, JsonValue] = {"type": field.field_type}
        if field.enum:
            prop["enum"] = list(field.enum)
        properties[field.name] = prop
    required = [f.name for f in fields if f.required]
    schema: dict[str, JsonValue] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    return RequestBodySpec(
        body_type="object",
        json_schema=schema,
        description="Request body",
        example={f.name: example_for_field(f) for f in fields},
        required=required,
    )


def has_body_read(content: str) -> bool:
    return bool(_BODY_READ.search(content) or _BODY_DESTRUCTURE.search(content))


def extract_request_body(ctx: RouteContext) -> RequestBodySpec | None:
    if ctx.method not in MUTATING_METHODS or not has_body_read(ctx.source):
        return None
    for strategy in BODY_STRATEGIES:
        fields = strategy(ctx)
        if fields:
            return build_body_spec(fields)
    return RequestBodySpec(
        body_type="object",
        json_schema={"type": "object", "properties": {}},
        description="Request body",
        example={},
        required=[],
    )
