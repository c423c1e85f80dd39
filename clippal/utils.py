import re
import typing
from datetime import datetime, timezone

from rapidfuzz.distance import LCSseq
from rich.markup import escape

from .config import (
    NO_MATCH_SCORE,
    SNIPPET_PREVIEW_WIDTH,
    SUBSEQUENCE_BASE_SCORE,
    TITLE_PREVIEW_WIDTH,
)
from .models import Entry


# --- Matching ---

def fuzzy_score(text: typing.Optional[str], term: str) -> int:
    """
    Scores how well `term` matches `text`; lower is better.

    Args:
        text: The clipboard value to search in.
        term: The search string entered by the user.

    Returns:
        The index of the first occurrence for a case-insensitive substring
        match. For an in-order (subsequence) match, SUBSEQUENCE_BASE_SCORE
        plus the total gap skipped while greedily matching each character.
        NO_MATCH_SCORE otherwise, including for an empty term.
    """
    if not term or text is None:
        return NO_MATCH_SCORE

    text = text.lower()
    term = term.lower()

    index = text.find(term)
    if index >= 0:
        return index

    # term is a subsequence of text iff their longest common subsequence is all of term
    if LCSseq.similarity(term, text) != len(term):
        return NO_MATCH_SCORE

    distance = 0
    pos = 0
    for char in term:
        found = text.find(char, pos)
        distance += found - pos
        pos = found + 1
    return SUBSEQUENCE_BASE_SCORE + distance


def fuzzy_filter(entries: typing.List[Entry], term: str) -> typing.List[Entry]:
    """
    Keeps the entries that match `term`, best match first.

    Ties keep their original (recency) order.
    """
    scored = [(fuzzy_score(entry.value, term), entry) for entry in entries]
    matched = [pair for pair in scored if pair[0] < NO_MATCH_SCORE]
    matched.sort(key=lambda pair: pair[0])
    return [entry for _, entry in matched]


# --- Display helpers ---

def highlight(text: str, term: typing.Optional[str], style: str = "magenta") -> str:
    """
    Returns `text` as rich markup with case-insensitive occurrences of
    `term` wrapped in `style`. The rest of the text is escaped.
    """
    if not term:
        return escape(text)
    parts = re.split(f"({re.escape(term)})", text, flags=re.IGNORECASE)
    # re.split with one capture group puts the matches at odd indices
    return "".join(
        f"[{style}]{escape(part)}[/{style}]" if i % 2 else escape(part)
        for i, part in enumerate(parts)
    )


def take_and_ellipsize(text: typing.Optional[str], width: int) -> str:
    if text is None:
        return ""
    if len(text) > width:
        return text[:width] + "..."
    return text


def preview_lines(value: str) -> typing.Tuple[str, str]:
    """Splits a value into a one-line title and a one-line snippet of the rest."""
    lines = value.split("\n")
    title = take_and_ellipsize(lines[0], TITLE_PREVIEW_WIDTH)
    snippet = take_and_ellipsize(" ".join(lines[1:]), SNIPPET_PREVIEW_WIDTH)
    return title, snippet


def format_ts(ts: typing.Any) -> str:
    """Formats a unix timestamp as 'YYYY-MM-DD HH:MM' (UTC)."""
    if not isinstance(ts, int) or isinstance(ts, bool):
        return ""
    try:
        return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")
    except (OverflowError, OSError, ValueError):
        # Outside what the platform clock can represent
        return ""
