"""Markdown formatter — human-readable documentation grouped by tag."""

import json

from api_scanner.parser.base import Documentation, Endpoint


def group_by_tag(endpoints: list[Endpoint]) -> dict[str, list[Endpoint]]:
    """Group endpoints by their first tag. Untagged endpoints go to 'General'."""
    groups: dict[str, list[Endpoint]] = {}
    for ep in endpoints:
        tag = ep.tags[0] if ep.tags else "General"
        groups.setdefault(tag, []).append(ep)
    return groups


def format_markdown(doc: Documentation) -> str:
    lines = [f"# {doc.info.title}", ""]
    if doc.info.description:
        lines.extend([doc.info.description, ""])
    lines.append(f"**Version:** {doc.info.version}  ")
    if doc.info.base_url:
        lines.append(f"**Base URL:** {doc.info.base_url}  ")
    lines.append(f"**Generated:** {doc.generated_at}  ")
    lines.extend([f"**Total Endpoints:** {doc.total_endpoints}", ""])

    for tag, endpoints in group_by_tag(doc.endpoints).items():
        lines.extend([f"## {tag}", ""])
        for endpoint in endpoints:
            lines.extend(_format_endpoint(endpoint))

    return "\n".join(lines).rstrip() + "\n"


def _format_endpoint(endpoint: Endpoint) -> list[str]:
    lines = [f"### {endpoint.method} {endpoint.url}", ""]
    if endpoint.title and endpoint.title != endpoint.description:
        lines.extend([f"**{endpoint.title}**", ""])
    if endpoint.description:
        lines.extend([endpoint.description, ""])

    if endpoint.authentication and endpoint.authentication.required:
        lines.extend([
            f"**Authentication:** {endpoint.authentication.auth_type} "
            f"(`{endpoint.authentication.header_name}: {endpoint.authentication.header_format}`)",
            "",
        ])

    if endpoint.parameters:
        lines.extend([
            "#### Parameters",
            "",
            "| Name | Type | Required | Location | Description |",
            "|------|------|----------|----------|-------------|",
        ])
        for param in endpoint.parameters:
            required = "Yes" if param.required else "No"
            lines.append(
                f"| {param.name} | {param.param_type} | {required} | {param.location} | {param.description or '-'} |"
            )
        lines.append("")

    if endpoint.request_headers:
        lines.extend(["#### Headers", ""])
        for header in endpoint.request_headers:
            marker = " (required)" if header.required else ""
            lines.append(f"- `{header.name}`{marker}: {header.description or '-'}")
        lines.append("")

    if endpoint.request_body and endpoint.request_body.example:
        lines.extend(["#### Request Body", "", "```json", json.dumps(endpoint.request_body.example, indent=2), "```", ""])

    if endpoint.responses:
        lines.extend(["#### Responses", ""])
        for status_code, response in endpoint.responses.items():
            lines.extend([f"**{status_code}** - {response.description}", ""])
            if response.example is not None:
                lines.extend(["```json", json.dumps(response.example, indent=2), "```", ""])

    lines.extend([f"**File:** `{endpoint.file}`", "", "---", ""])
    return lines
