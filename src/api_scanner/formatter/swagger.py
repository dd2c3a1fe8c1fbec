"""OpenAPI 3.0 formatter.

URL templates already use ``{name}`` placeholders, so paths only need the
``/api`` root stripped (it becomes the server URL).
"""

import json

import yaml

from api_scanner.formatter.markdown import group_by_tag
from api_scanner.parser.base import API_ROOT, Documentation, Endpoint, Parameter, ResponseSpec

TYPE_MAP = {
    "string": "string",
    "number": "number",
    "integer": "integer",
    "boolean": "boolean",
    "object": "object",
    "array": "array",
    "date": "string",
}

SECURITY_SCHEMES = {
    "bearer": ("bearerAuth", {"type": "http", "scheme": "bearer"}),
    "basic": ("basicAuth", {"type": "http", "scheme": "basic"}),
    "api-key": ("apiKeyAuth", {"type": "apiKey", "in": "header", "name": "X-API-Key"}),
}


def openapi_path(url: str) -> str:
    if url.startswith(API_ROOT):
        url = url[len(API_ROOT):]
    return url or "/"


def map_type(param_type: str) -> str:
    cleaned = param_type.strip().rstrip("?").lower()
    if cleaned.endswith("[]") or cleaned.startswith("array"):
        return "array"
    return TYPE_MAP.get(cleaned, "string")


def build_openapi(doc: Documentation) -> dict:
    spec: dict = {
        "openapi": "3.0.0",
        "info": {"title": doc.info.title, "version": doc.info.version},
        "servers": [{"url": doc.info.base_url or API_ROOT, "description": "API Server"}],
        "paths": {},
        "tags": [],
    }
    if doc.info.description:
        spec["info"]["description"] = doc.info.description

    schemes: dict = {}
    for tag, endpoints in group_by_tag(doc.endpoints).items():
        spec["tags"].append({"name": tag, "description": f"{tag} endpoints"})
        for endpoint in endpoints:
            operation = _operation(endpoint, tag)
            auth = endpoint.authentication
            if auth and auth.required and auth.auth_type in SECURITY_SCHEMES:
                name, scheme = SECURITY_SCHEMES[auth.auth_type]
                schemes[name] = scheme
                operation["security"] = [{name: []}]
            spec["paths"].setdefault(openapi_path(endpoint.url), {})[endpoint.method.lower()] = operation

    if schemes:
        spec["components"] = {"securitySchemes": schemes}
    return spec


def _operation(endpoint: Endpoint, tag: str) -> dict:
    operation: dict = {
        "tags": [tag],
        "summary": endpoint.summary or endpoint.title or endpoint.description or "",
        "operationId": _operation_id(endpoint),
    }
    if endpoint.description:
        operation["description"] = endpoint.description

    parameters = [_parameter(p) for p in endpoint.parameters if p.location != "body"]
    for header in endpoint.request_headers or []:
        # Authorization is covered by security schemes
        if header.name.lower() == "authorization":
            continue
        parameters.append({
            "name": header.name,
            "in": "header",
            "required": header.required,
            "schema": {"type": "string"},
            "description": header.description or "",
        })
    if parameters:
        operation["parameters"] = parameters

    request_body = _request_body(endpoint)
    if request_body:
        operation["requestBody"] = request_body

    operation["responses"] = {code: _response(r) for code, r in endpoint.responses.items()} or {
        "default": {"description": "Response"}
    }
    return operation


def _operation_id(endpoint: Endpoint) -> str:
    parts = [p.strip("{}") for p in openapi_path(endpoint.url).split("/") if p]
    return "_".join([endpoint.method.lower(), *parts]) if parts else endpoint.method.lower()


def _parameter(param: Parameter) -> dict:
    result = {
        "name": param.name,
        "in": param.location,
        "required": param.required,
        "schema": {"type": map_type(param.param_type)},
    }
    if param.description:
        result["description"] = param.description
    if param.example is not None:
        result["example"] = param.example
    return result


def _request_body(endpoint: Endpoint) -> dict | None:
    body = endpoint.request_body
    if body is not None:
        content: dict = {"schema": body.json_schema or {"type": "object"}}
        if body.example is not None:
            content["example"] = body.example
        return {
            "required": bool(body.required),
            "description": body.description or "Request body",
            "content": {"application/json": content},
        }

    body_params = [p for p in endpoint.parameters if p.location == "body"]
    if not body_params:
        return None
    properties = {p.name: {"type": map_type(p.param_type)} for p in body_params}
    return {
        "required": any(p.required for p in body_params),
        "content": {"application/json": {"schema": {"type": "object", "properties": properties}}},
    }


def _response(response: ResponseSpec) -> dict:
    schema: dict = {"type": "object"}
    if response.example is not None:
        schema["example"] = response.example
    return {"description": response.description, "content": {"application/json": {"schema": schema}}}


def format_swagger(doc: Documentation, as_yaml: bool = False) -> str:
    spec = build_openapi(doc)
    if as_yaml:
        return yaml.safe_dump(spec, sort_keys=False, allow_unicode=True)
    return json.dumps(spec, indent=2)
