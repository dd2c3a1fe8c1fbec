import json

import yaml

from api_scanner.formatter.dispatch import format_documentation, write_documentation
from api_scanner.formatter.json_folder import endpoint_category, endpoint_id, write_json_folder
from api_scanner.formatter.markdown import format_markdown, group_by_tag
from api_scanner.formatter.react import format_react
from api_scanner.formatter.swagger import build_openapi, format_swagger, map_type, openapi_path
from api_scanner.parser.base import (
    AuthSpec,
    Documentation,
    DocumentationInfo,
    Endpoint,
    Parameter,
    RequestBodySpec,
    RequestHeaderSpec,
    ResponseSpec,
)

BEARER = AuthSpec(
    auth_type="bearer",
    required=True,
    description="Bearer token",
    header_name="Authorization",
    header_format="Bearer <token>",
)


def _doc() -> Documentation:
    get_user = Endpoint(
        method="GET",
        url="/api/users/{id}",
        file="src/app/api/users/[id]/route.ts",
        title="Get Users by ID",
        description="Retrieve users by ID",
        summary="Get Users by ID",
        parameters=[Parameter(name="id", param_type="string", required=True, location="path", description="Path parameter: id")],
        responses={"200": ResponseSpec(status_code="200", description="Success", example={"user": {"id": "1"}})},
        request_headers=[
            RequestHeaderSpec(name="Authorization", required=True, description="Bearer token"),
            RequestHeaderSpec(name="X-Request-ID", required=False, description="Trace id"),
        ],
        tags=["users"],
        requires_auth=True,
        authentication=BEARER,
    )
    create_task = Endpoint(
        method="POST",
        url="/api/tasks",
        file="src/app/api/tasks/route.ts",
        title="Create Tasks",
        description="Create tasks",
        summary="Create Tasks",
        parameters=[Parameter(name="body", param_type="object", required=True, location="body")],
        responses={"201": ResponseSpec(status_code="201", description="Created")},
        request_body=RequestBodySpec(
            json_schema={"type": "object", "properties": {"title": {"type": "string"}}, "required": ["title"]},
            example={"title": "Example Title"},
            required=["title"],
        ),
        tags=["tasks"],
    )
    return Documentation(
        info=DocumentationInfo(title="Demo API", base_url="https://demo.test/api"),
        endpoints=[get_user, create_task],
        total_endpoints=2,
        generated_at="2024-01-01T00:00:00Z",
    )


class TestMarkdown:
    def test_header_and_sections(self):
        out = format_markdown(_doc())
        assert out.startswith("# Demo API\n")
        assert "**Base URL:** https://demo.test/api" in out
        assert "**Total Endpoints:** 2" in out
        assert "## users" in out
        assert "### GET /api/users/{id}" in out
        assert "| id | string | Yes | path | Path parameter: id |" in out
        assert "**Authentication:** bearer (`Authorization: Bearer <token>`)" in out
        assert "- `Authorization` (required): Bearer token" in out
        assert '"title": "Example Title"' in out
        assert "**File:** `src/app/api/tasks/route.ts`" in out

    def test_untagged_goes_to_general(self):
        ep = Endpoint(method="GET", url="/api", file="route.ts")
        assert list(group_by_tag([ep])) == ["General"]


class TestSwagger:
    def test_paths_and_servers(self):
        spec = build_openapi(_doc())
        assert spec["openapi"] == "3.0.0"
        assert spec["servers"][0]["url"] == "https://demo.test/api"
        assert set(spec["paths"]) == {"/users/{id}", "/tasks"}
        assert [t["name"] for t in spec["tags"]] == ["users", "tasks"]

    def test_operation_details(self):
        op = build_openapi(_doc())["paths"]["/users/{id}"]["get"]
        assert op["operationId"] == "get_users_id"
        assert op["security"] == [{"bearerAuth": []}]
        names = [(p["name"], p["in"]) for p in op["parameters"]]
        assert names == [("id", "path"), ("X-Request-ID", "header")]
        assert op["responses"]["200"]["content"]["application/json"]["schema"]["example"] == {"user": {"id": "1"}}

    def test_security_schemes(self):
        spec = build_openapi(_doc())
        assert spec["components"]["securitySchemes"] == {"bearerAuth": {"type": "http", "scheme": "bearer"}}

    def test_request_body_not_a_parameter(self):
        op = build_openapi(_doc())["paths"]["/tasks"]["post"]
        assert "parameters" not in op
        body = op["requestBody"]
        assert body["required"] is True
        assert body["content"]["application/json"]["schema"]["required"] == ["title"]
        assert "security" not in op

    def test_body_parameters_fallback(self):
        ep = Endpoint(
            method="PUT",
            url="/api/notes/{id}",
            file="route.ts",
            parameters=[Parameter(name="text", param_type="string", required=False, location="body")],
        )
        doc = Documentation(info=DocumentationInfo(), endpoints=[ep], total_endpoints=1, generated_at="now")
        op = build_openapi(doc)["paths"]["/notes/{id}"]["put"]
        assert op["requestBody"]["content"]["application/json"]["schema"]["properties"] == {"text": {"type": "string"}}
        assert op["responses"] == {"default": {"description": "Response"}}

    def test_helpers(self):
        assert openapi_path("/api") == "/"
        assert map_type("number?") == "number"
        assert map_type("string[]") == "array"
        assert map_type("CustomType") == "string"

    def test_json_and_yaml_agree(self):
        doc = _doc()
        assert json.loads(format_swagger(doc)) == yaml.safe_load(format_swagger(doc, as_yaml=True))


class TestJsonFolder:
    def test_ids_and_categories(self):
        ep = _doc().endpoints[0]
        assert endpoint_id(ep) == "get--api-users--id"
        assert endpoint_category("/api/users/{id}") == "users"
        assert endpoint_category("/api") == "general"

    def test_writes_index_and_endpoint_files(self, tmp_path):
        written = write_json_folder(_doc(), tmp_path / "docs")
        assert len(written) == 3
        index = json.loads((tmp_path / "docs" / "index.json").read_text())
        assert index["totalEndpoints"] == 2
        assert [e["category"] for e in index["endpoints"]] == ["users", "tasks"]
        detail = json.loads((tmp_path / "docs" / "tasks" / "post--api-tasks.json").read_text())
        assert detail["requestBody"]["required"] == ["title"]
        assert detail["category"] == "tasks"


class TestReact:
    def test_embeds_documentation(self):
        out = format_react(_doc())
        assert "const apiData = {" in out
        assert '"totalEndpoints": 2' in out
        assert "export default ApiDocsPage;" in out


class TestDispatch:
    def test_json_is_default(self):
        data = json.loads(format_documentation(_doc(), "json"))
        assert data["totalEndpoints"] == len(data["endpoints"]) == 2

    def test_yaml_swagger_by_suffix(self, tmp_path):
        out = tmp_path / "openapi.yaml"
        write_documentation(_doc(), "swagger", out)
        assert yaml.safe_load(out.read_text())["openapi"] == "3.0.0"

    def test_creates_parent_dirs(self, tmp_path):
        out = tmp_path / "nested" / "docs.md"
        assert write_documentation(_doc(), "markdown", out) == [out]
        assert out.read_text().startswith("# Demo API")
