"""
Prompt codec: selection tree <-> weighted, parenthesized prompt text.

Grammar produced by serialize:
    prompt := item (", " item)*
    item   := outputText | group
    group  := "(" item (", " item)* (":" weight)? ")"
"""

from domain.codec.parse import ParsedItem, ScannedToken, parse_prompt, scan_prompt, unresolved_tokens
from domain.codec.rebuild import rebuild_tree
from domain.codec.serialize import format_weight, render_display, serialize

__all__ = [
    # Serialize
    "serialize",
    "render_display",
    "format_weight",
    # Parse
    "scan_prompt",
    "parse_prompt",
    "unresolved_tokens",
    "ScannedToken",
    "ParsedItem",
    # Import
    "rebuild_tree",
]
