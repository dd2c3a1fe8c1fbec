"""Pick a formatter for an output format and write the result."""

from pathlib import Path

from api_scanner.formatter.json_folder import write_json_folder
from api_scanner.formatter.markdown import format_markdown
from api_scanner.formatter.react import format_react
from api_scanner.formatter.swagger import format_swagger
from api_scanner.parser.base import Documentation

FORMATS = ("json", "json-folder", "markdown", "swagger", "react")

DEFAULT_OUTPUTS = {
    "json": "api-documentation.json",
    "json-folder": "public/api-documentation",
    "markdown": "api-documentation.md",
    "swagger": "swagger.json",
    "react": "ApiDocsPage.tsx",
}


def format_documentation(doc: Documentation, fmt: str, as_yaml: bool = False) -> str:
    """Render the documentation as a string in the given format."""
    if fmt == "markdown":
        return format_markdown(doc)
    elif fmt == "swagger":
        return format_swagger(doc, as_yaml=as_yaml)
    elif fmt == "react":
        return format_react(doc)
    else:
        return doc.to_json()


def write_documentation(doc: Documentation, fmt: str, output: Path) -> list[Path]:
    """Write the documentation to output. json-folder treats output as a directory."""
    if fmt == "json-folder":
        return write_json_folder(doc, output)

    content = format_documentation(doc, fmt, as_yaml=output.suffix in (".yaml", ".yml"))
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    return [output]
