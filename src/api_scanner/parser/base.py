"""Unified data models for scanned API routes.

Every extractor produces values of these models, and every formatter
consumes the resulting Documentation. Models are frozen and serialize
with camelCase keys (``totalEndpoints``, ``requestHeaders`` ...).
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue
from pydantic.alias_generators import to_camel

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")
MUTATING_METHODS = ("POST", "PUT", "PATCH", "DELETE")

API_ROOT = "/api"


class ScanModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RouteFile(ScanModel):
    """A discovered handler file and its raw text."""

    path: str
    content: str


class ParsedRoute(ScanModel):
    """One (file, verb) pair found by the method extractor."""

    method: str
    url: str  # /api/users/{id}
    file: str
    content: str


class Parameter(ScanModel):
    name: str
    param_type: str = Field(alias="type")  # string / number / boolean / object / array
    required: bool
    location: Literal["path", "query", "body", "header"]
    description: str | None = None
    example: JsonValue = None


class ResponseSpec(ScanModel):
    status_code: str
    description: str
    example: JsonValue = None
    required_fields: list[str] = []
    optional_fields: list[str] = []


class RequestHeaderSpec(ScanModel):
    name: str
    required: bool
    description: str | None = None


class RequestBodySpec(ScanModel):
    body_type: str = Field(default="object", alias="type")
    json_schema: dict[str, JsonValue] = Field(default_factory=dict, alias="schema")
    description: str | None = None
    example: JsonValue = None
    required: list[str] = []


class AuthSpec(ScanModel):
    auth_type: Literal["none", "bearer", "api-key", "basic"] = Field(alias="type")
    required: bool
    description: str
    header_name: str | None = None
    header_format: str | None = None
    login_endpoint: str | None = None
    example: dict[str, JsonValue] | None = None
    steps: list[str] = []


class Endpoint(ScanModel):
    """A single API endpoint with all its inferred metadata."""

    method: str
    url: str
    file: str
    title: str | None = None
    description: str | None = None
    summary: str | None = None
    parameters: list[Parameter] = []
    responses: dict[str, ResponseSpec] = {}
    request_headers: list[RequestHeaderSpec] | None = None
    request_body: RequestBodySpec | None = None
    tags: list[str] = []
    requires_auth: bool = False
    authentication: AuthSpec | None = None


class InfoAuthentication(ScanModel):
    auth_type: Literal["bearer", "api-key", "basic", "none"] | None = Field(default=None, alias="type")
    required: bool | None = None
    endpoint: str | None = None
    header_name: str | None = None
    description: str | None = None


class DocumentationInfo(ScanModel):
    title: str = "API Documentation"
    version: str = "1.0.0"
    description: str | None = "Auto-generated API documentation"
    base_url: str | None = None
    authentication: InfoAuthentication | None = None


class Documentation(ScanModel):
    """Root aggregate handed to every formatter."""

    info: DocumentationInfo
    endpoints: list[Endpoint]
    total_endpoints: int
    generated_at: str

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


class RouteContext(ScanModel):
    """Everything a field extractor may look at for one (file, verb) pair."""

    method: str
    url: str
    file: str
    content: str
    section: str | None = None
    handler_offset: int | None = None
    login_endpoint: str = "/api/auth/signin"

    @property
    def source(self) -> str:
        """The handler's own section of the file (the whole file if unknown)."""
        return self.section if self.section is not None else self.content
