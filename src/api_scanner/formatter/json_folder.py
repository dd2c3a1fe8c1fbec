"""JSON folder formatter — an index plus one file per endpoint, grouped by category."""

import json
import re
from pathlib import Path

from api_scanner.parser.base import Documentation, Endpoint

DEFAULT_FOLDER = Path("public/api-documentation")


def endpoint_id(endpoint: Endpoint) -> str:
    url = re.sub(r"[^a-zA-Z0-9]", "-", endpoint.url)
    return f"{endpoint.method.lower()}-{url}".strip("-")


def endpoint_category(url: str) -> str:
    parts = url.split("/")
    return parts[2] if len(parts) > 2 and parts[2] else "general"


def group_by_category(endpoints: list[Endpoint]) -> dict[str, list[Endpoint]]:
    groups: dict[str, list[Endpoint]] = {}
    for ep in endpoints:
        groups.setdefault(endpoint_category(ep.url), []).append(ep)
    return groups


def _safe_dir_name(category: str) -> str:
    return re.sub(r"[^a-zA-Z0-9_.-]", "-", category).strip("-") or "general"


def write_json_folder(doc: Documentation, base_dir: Path = DEFAULT_FOLDER) -> list[Path]:
    """Write index.json and per-endpoint files under base_dir. Returns the written paths."""
    base_dir.mkdir(parents=True, exist_ok=True)
    written = []

    index = {
        "info": doc.info.model_dump(by_alias=True, exclude_none=True),
        "generatedAt": doc.generated_at,
        "totalEndpoints": doc.total_endpoints,
        "endpoints": [
            {
                "id": endpoint_id(ep),
                "method": ep.method,
                "url": ep.url,
                "title": ep.title,
                "description": ep.description,
                "category": endpoint_category(ep.url),
                "file": ep.file,
            }
            for ep in doc.endpoints
        ],
    }
    index_path = base_dir / "index.json"
    index_path.write_text(json.dumps(index, indent=2), encoding="utf-8")
    written.append(index_path)

    for category, endpoints in group_by_category(doc.endpoints).items():
        category_dir = base_dir / _safe_dir_name(category)
        category_dir.mkdir(parents=True, exist_ok=True)
        for ep in endpoints:
            data = ep.model_dump(by_alias=True, exclude_none=True)
            data = {"id": endpoint_id(ep), **data, "category": category}
            file_path = category_dir / f"{endpoint_id(ep)}.json"
            file_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            written.append(file_path)

    return written
