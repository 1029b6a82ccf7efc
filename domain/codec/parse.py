"""
Parse prompt text back into taxonomy terms.

The scanner walks the text once, tracking parenthesis depth:
- commas at depth 0 separate independent items;
- every token inside one outermost parenthesized span shares a span id;
  deeper nesting is flattened into the enclosing span;
- a ``:weight`` suffix on the token closing the outermost span is the span's weight.

Malformed input never raises: stray ``)`` is ignored, an unclosed ``(`` ends
at the end of the text, and tokens that match no term are dropped.
"""

import logging
import re

from pydantic import BaseModel

from domain.taxonomy.models import Taxonomy, Term

logger = logging.getLogger(__name__)

_WEIGHT_SUFFIX = re.compile(r"^(?P<text>.*?)\s*:\s*(?P<weight>[+-]?(?:\d+(?:\.\d*)?|\.\d+))\s*$", re.DOTALL)


class ScannedToken(BaseModel):
    """Raw token with the span it belongs to (None for top-level items)."""

    text: str
    group_id: int | None = None
    weight: float | None = None


class ParsedItem(BaseModel):
    """Resolved token: a taxonomy term plus its span id and span weight."""

    term: Term
    group_id: int | None = None
    weight: float | None = None


def _split_weight(token: str) -> tuple[str, float | None]:
    m = _WEIGHT_SUFFIX.match(token)
    if m is None:
        return token, None
    return m.group("text"), float(m.group("weight"))


def scan_prompt(text: str) -> list[ScannedToken]:
    tokens: list[ScannedToken] = []
    span_weights: dict[int, float] = {}
    buf: list[str] = []
    depth = 0
    span: int | None = None
    next_span = 0

    def flush(closing_depth: int = 0) -> None:
        raw = "".join(buf)
        buf.clear()
        if closing_depth:
            raw, weight = _split_weight(raw)
            if weight is not None:
                if closing_depth == 1 and span is not None:
                    span_weights[span] = weight
                else:
                    logger.debug("Dropping nested weight %s (nesting is flattened)", weight)
        raw = raw.strip()
        if raw:
            tokens.append(ScannedToken(text=raw, group_id=span))

    for pos, ch in enumerate(text):
        if ch == "(":
            flush()
            if depth == 0:
                next_span += 1
                span = next_span
            depth += 1
        elif ch == ")":
            if depth == 0:
                logger.debug("Ignoring unmatched ')' at position %d", pos)
                continue
            flush(closing_depth=depth)
            depth -= 1
            if depth == 0:
                span = None
        elif ch == ",":
            flush()
        else:
            buf.append(ch)

    if depth:
        logger.debug("Unclosed '(' at end of prompt; closing %d level(s)", depth)
        flush(closing_depth=depth)
    else:
        flush()

    for token in tokens:
        if token.group_id is not None:
            token.weight = span_weights.get(token.group_id)
    return tokens


def parse_prompt(text: str, taxonomy: Taxonomy) -> list[ParsedItem]:
    """
    Parse prompt text into taxonomy terms, in text order.

    Tokens are matched case-sensitively against term output text (first
    match wins). Unresolved tokens are dropped.
    """
    items: list[ParsedItem] = []
    for token in scan_prompt(text):
        term = taxonomy.find_by_output_text(token.text)
        if term is None:
            logger.debug("Dropping unknown prompt token %r", token.text)
            continue
        items.append(ParsedItem(term=term, group_id=token.group_id, weight=token.weight))
    return items


def unresolved_tokens(text: str, taxonomy: Taxonomy) -> list[str]:
    """Return the tokens of text that match no taxonomy term."""
    return [t.text for t in scan_prompt(text) if taxonomy.find_by_output_text(t.text) is None]
