"""Title and description inference.

A doc comment sitting directly above the handler wins. Without one, a
title is synthesized from the URL template and the HTTP verb.
"""

import re

from api_scanner.parser.base import API_ROOT, RouteContext

_DOC_BLOCK = re.compile(r"/\*\*(.*?)\*/", re.DOTALL)
_ATTACHED_GAP = re.compile(r"\s*(?://[^\n]*\s*)*")
_TAG_LINE = re.compile(r"^@([\w-]+)\s*(.*)$")

ACTION_WORDS = {
    "POST": "Create",
    "PUT": "Update",
    "PATCH": "Update",
    "DELETE": "Delete",
    "HEAD": "Check",
    "OPTIONS": "Options",
}

ACTION_PHRASES = {
    "List": "Retrieve a list of",
    "Get": "Retrieve",
    "Create": "Create",
    "Update": "Update",
    "Delete": "Delete",
    "Check": "Check",
    "Options": "Describe the options of",
}


def find_doc_match(content: str, offset: int | None) -> re.Match | None:
    """The doc comment attached to the handler at offset, if any."""
    if offset is None:
        return None
    before = content[:offset]
    # search backwards from the handler, never forwards from an earlier "/**"
    close = before.rfind("*/")
    if close == -1 or not _ATTACHED_GAP.fullmatch(before[close + 2:]):
        return None
    start = before.rfind("/**", 0, close)
    if start == -1:
        return None
    match = _DOC_BLOCK.match(before, start)
    if match is None or match.end() != close + 2:
        return None
    return match


def find_doc_block(content: str, offset: int | None) -> str | None:
    match = find_doc_match(content, offset)
    return match.group(1) if match else None


def doc_lines(block: str) -> list[str]:
    lines = []
    for raw in block.splitlines():
        line = raw.strip()
        if line.startswith("*"):
            line = line[1:].strip()
        if line:
            lines.append(line)
    return lines


def title_from_doc(ctx: RouteContext) -> tuple[str | None, str | None] | None:
    block = find_doc_block(ctx.content, ctx.handler_offset)
    if block is None:
        return None

    title = None
    description = None
    free_text: list[str] = []
    seen_tag = False
    for line in doc_lines(block):
        match = _TAG_LINE.match(line)
        if match:
            seen_tag = True
            tag, value = match.group(1).lower(), match.group(2).strip()
            if tag == "api-title" and value:
                title = value
            elif tag in ("api-description", "description") and value:
                description = value
        elif not seen_tag:
            free_text.append(line)

    if free_text:
        title = title or free_text[0]
        description = description or " ".join(free_text[1:]) or free_text[0]
    if title is None and description is None:
        return None
    return title, description


def synthesize_title(ctx: RouteContext) -> tuple[str, str]:
    """Build a deterministic title like 'Get Users by ID' from the URL."""
    path = ctx.url[len(API_ROOT):] if ctx.url.startswith(API_ROOT) else ctx.url
    segments = [s for s in path.split("/") if s]
    static = [s for s in segments if not _is_dynamic(s)]
    has_id = any(_is_dynamic(s) for s in segments)

    resource = static[0] if static else "root"
    sub_action = static[1] if len(static) > 1 else None

    if ctx.method == "GET":
        action = "Get" if sub_action or has_id else "List"
    else:
        action = ACTION_WORDS.get(ctx.method, ctx.method.capitalize())

    words = [action, _capitalize(resource)]
    if sub_action:
        words.append(_capitalize(sub_action))
    title = " ".join(words)
    if has_id:
        title += " by ID"

    subject = " ".join(static[:2]) or resource
    description = f"{ACTION_PHRASES.get(action, action)} {subject}"
    if has_id:
        description += " by ID"
    return title, description


def extract_title(ctx: RouteContext) -> tuple[str, str]:
    """Return (title, description), falling back to the synthesized pair."""
    synthesized_title, synthesized_description = synthesize_title(ctx)
    documented = title_from_doc(ctx)
    if documented is None:
        return synthesized_title, synthesized_description
    title, description = documented
    return title or synthesized_title, description or title or synthesized_description


def _is_dynamic(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]
