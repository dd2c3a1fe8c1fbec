from api_scanner.parser.base import RouteContext
from api_scanner.parser.params import (
    extract_annotated_parameters,
    extract_body_parameters,
    extract_parameters,
    extract_path_parameters,
    extract_query_parameters,
)


def _ctx(content: str, method: str = "GET", url: str = "/api/items") -> RouteContext:
    return RouteContext(method=method, url=url, file="route.ts", content=content)


class TestPathParameters:
    def test_one_per_placeholder_in_order(self):
        params = extract_path_parameters("/api/orgs/{orgId}/members/{memberId}")
        assert [p.name for p in params] == ["orgId", "memberId"]
        assert all(p.required and p.location == "path" and p.param_type == "string" for p in params)
        assert params[0].description == "Path parameter: orgId"

    def test_no_placeholders(self):
        assert extract_path_parameters("/api/users") == []


class TestAnnotatedParameters:
    def test_optional_marker(self):
        content = "@param {number?} query.page Page number\n@param {string} query.search Search term"
        params = extract_annotated_parameters(content, "query", "query")
        assert [(p.name, p.param_type, p.required) for p in params] == [
            ("page", "number", False),
            ("search", "string", True),
        ]
        assert params[0].description == "Page number"

    def test_bracketed_name_is_optional(self):
        params = extract_annotated_parameters("@param {string} [query.sort] - Sort key", "query", "query")
        assert params[0].name == "sort"
        assert params[0].required is False
        assert params[0].description == "Sort key"

    def test_prefix_picks_location(self):
        content = "@param {string} body.title Title\n@param {string} query.draft Draft flag"
        assert [p.name for p in extract_annotated_parameters(content, "body", "query")] == ["title"]

    def test_unprefixed_goes_to_default(self):
        params = extract_annotated_parameters("@param {string} limit Max items", "query", "query")
        assert [p.name for p in params] == ["limit"]
        assert extract_annotated_parameters("@param {string} limit Max items", "query", "body") == []

    def test_skips_handler_arguments(self):
        content = "@param {NextRequest} request The request\n@param {object} context Route context"
        assert extract_annotated_parameters(content, "query", "query") == []


class TestQueryParameters:
    def test_placeholder_without_annotations(self):
        params = extract_query_parameters(_ctx("const q = request.nextUrl.searchParams.get('q');"))
        assert len(params) == 1
        assert params[0].name == "query"
        assert params[0].param_type == "object"
        assert params[0].required is False

    def test_no_marker(self):
        assert extract_query_parameters(_ctx("@param {string} query.q Search")) == []


class TestBodyParameters:
    def test_placeholder_for_post(self):
        params = extract_body_parameters(_ctx("const body = await req.json();", "POST"))
        assert [(p.name, p.location, p.required) for p in params] == [("body", "body", True)]

    def test_annotated_body(self):
        content = "@param {string} body.title Task title\nexport async function POST(request: Request) {}"
        params = extract_body_parameters(_ctx(content, "POST"))
        assert [p.name for p in params] == ["title"]

    def test_not_for_get_or_delete(self):
        assert extract_body_parameters(_ctx("await req.json()", "GET")) == []
        assert extract_body_parameters(_ctx("await req.json()", "DELETE")) == []


class TestExtractParameters:
    def test_path_then_query_then_body(self):
        content = "const s = searchParams.get('x');\nconst body = await request.json();"
        params = extract_parameters(_ctx(content, "PUT", "/api/items/{id}"))
        assert [p.location for p in params] == ["path", "query", "body"]
