"""Split a route file into per-handler sections.

A handler's section runs from its doc comment (or signature) to the start
of the next handler. Everything before the first handler (imports, types,
helpers) is shared by all of them.
"""

from api_scanner.parser.base import HTTP_METHODS
from api_scanner.parser.docs import find_doc_match
from api_scanner.parser.methods import find_handler_offset


def handler_starts(content: str) -> dict[str, int]:
    starts = {}
    for method in HTTP_METHODS:
        offset = find_handler_offset(content, method)
        if offset is None:
            continue
        doc = find_doc_match(content, offset)
        starts[method] = doc.start() if doc else offset
    return starts


def handler_source(content: str, method: str) -> str:
    """The shared preamble followed by the method's own section."""
    starts = handler_starts(content)
    if method not in starts:
        return content

    own = starts[method]
    later = [start for start in starts.values() if start > own]
    end = min(later) if later else len(content)
    preamble_end = min(starts.values())
    return content[:preamble_end] + content[own:end]
