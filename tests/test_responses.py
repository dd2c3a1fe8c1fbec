from api_scanner.parser.base import RouteContext
from api_scanner.parser.catalog import USER, lookup_payload
from api_scanner.parser.responses import (
    annotated_responses,
    describe_status,
    extract_responses,
    parse_response_annotation,
    payload_names,
)


def _ctx(content: str, method: str = "GET") -> RouteContext:
    return RouteContext(method=method, url="/api/users", file="route.ts", content=content)


class TestCatalog:
    def test_collection(self):
        assert lookup_payload(["users"]) == {"users": [USER]}

    def test_singular(self):
        assert lookup_payload(["user"]) == {"user": USER}

    def test_pagination_wins(self):
        payload = lookup_payload(["projects", "pagination"])
        assert set(payload) == {"data", "pagination"}

    def test_success(self):
        assert lookup_payload(["success", "true"]) == {"success": True, "message": "Operation completed successfully"}

    def test_unknown(self):
        assert lookup_payload(["result"]) is None

    def test_payloads_are_copies(self):
        lookup_payload(["user"])["user"]["name"] = "changed"
        assert USER["name"] == "Example Name"


class TestPayloadNames:
    def test_object_shorthand_and_values(self):
        assert payload_names("{ tasks, total: count, ...rest }") == ["tasks", "total", "count"]

    def test_variable(self):
        assert payload_names("result.data") == ["data"]


class TestLiteralResponses:
    def test_collection_response(self):
        responses = extract_responses(_ctx("return NextResponse.json({ users });"))
        assert list(responses) == ["200"]
        assert responses["200"].example == {"users": [USER]}

    def test_status_option(self):
        responses = extract_responses(_ctx("return NextResponse.json({ user }, { status: 201 });", "POST"))
        assert list(responses) == ["201"]
        assert responses["201"].description == "Created"

    def test_skips_error_calls(self):
        content = (
            "if (!user) return NextResponse.json({ error: 'Not found' }, { status: 404 });\n"
            "return NextResponse.json(user);"
        )
        responses = extract_responses(_ctx(content))
        assert responses["200"].example == {"user": USER}
        assert "404" not in responses

    def test_express_style(self):
        responses = extract_responses(_ctx("res.status(200).json({ success: true });"))
        assert responses["200"].example["success"] is True


class TestDefaultResponses:
    def test_get_defaults(self):
        responses = extract_responses(_ctx("return NextResponse.json(data);"))
        assert list(responses) == ["200", "404"]
        assert responses["200"].example == {"data": []}

    def test_post_defaults(self):
        assert list(extract_responses(_ctx("", "POST"))) == ["200", "201", "400"]

    def test_delete_defaults(self):
        assert list(extract_responses(_ctx("", "DELETE"))) == ["200", "404"]

    def test_other_methods_have_none(self):
        assert extract_responses(_ctx("", "OPTIONS")) == {}


class TestResponseAnnotations:
    def test_description_and_example(self):
        spec = parse_response_annotation("409", 'Conflict {"error": "Email already registered"}')
        assert spec.description == "Conflict"
        assert spec.example == {"error": "Email already registered"}

    def test_example_only(self):
        spec = parse_response_annotation("409", '{"error": "Taken"}')
        assert spec.description == "Conflict"

    def test_malformed_json_keeps_text(self):
        spec = parse_response_annotation("400", "Bad input {not json}")
        assert spec.description == "Bad input {not json}"
        assert spec.example is None

    def test_plain_text(self):
        assert parse_response_annotation("204", "Deleted").description == "Deleted"

    def test_annotation_overrides_inferred(self):
        content = "/**\n * @response 200 Everything {\"users\": []}\n */\nreturn NextResponse.json({ users });"
        responses = extract_responses(_ctx(content))
        assert responses["200"].description == "Everything"
        assert responses["200"].example == {"users": []}

    def test_annotations_collected(self):
        content = "@response 401 Unauthorized\n@response 403 Forbidden"
        assert list(annotated_responses(content)) == ["401", "403"]


class TestResponseFields:
    def test_field_vocabulary(self):
        content = "const { id, status } = task;\nreturn NextResponse.json({ tasks, metadata });"
        spec = extract_responses(_ctx(content))["200"]
        assert spec.required_fields == ["id", "status"]
        assert spec.optional_fields == ["metadata"]


class TestDescribeStatus:
    def test_known_and_standard(self):
        assert describe_status("404") == "Not found"
        assert describe_status("429") == "Too Many Requests"
        assert describe_status("299") == "Response"
