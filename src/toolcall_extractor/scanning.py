"""String-aware scanning primitives shared by every extractor.

All bracket matching in the package goes through :func:`iter_unquoted`, a
single left-to-right pass that tracks quote state, escape sequences and
bracket depth. Nothing here uses backtracking regular expressions, so the cost
of a scan is linear in the input length.
"""

import re
from dataclasses import dataclass
from typing import Iterator

OPENERS = "{[("
CLOSERS = "}])"
PAIRS = {"{": "}", "[": "]", "(": ")"}

JSON_QUOTES = '"'
PYTHON_QUOTES = "\"'"


@dataclass(frozen=True)
class FencedBlock:
    """A Markdown code fence found in the input."""
    start: int
    end: int
    label: str
    body: str


@dataclass(frozen=True)
class Delimited:
    """A region between a start marker and the next end marker."""
    start: int
    end: int
    inner: str


def iter_unquoted(text: str, start: int = 0, quotes: str = PYTHON_QUOTES) -> Iterator[tuple[int, str, int]]:
    """Yield ``(index, char, depth)`` for every character outside string literals.

    ``depth`` is the bracket depth after the character has been applied, so an
    opener at top level is reported with depth 1 and its closer with depth 0.
    Stray closers never drive the depth below zero.
    """
    depth = 0
    quote: str | None = None
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]

        if quote is not None:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue

        if ch in quotes:
            quote = ch
            continue

        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            depth = max(depth - 1, 0)

        yield i, ch, depth


def find_balanced(text: str, start: int, quotes: str = PYTHON_QUOTES) -> int | None:
    """Return the index just past the bracket closing the opener at ``start``.

    Returns None when ``text[start]`` is not an opener or the structure is
    never closed (e.g. truncated output).
    """
    if start >= len(text) or text[start] not in OPENERS:
        return None

    for i, ch, depth in iter_unquoted(text, start, quotes):
        if depth == 0 and ch in CLOSERS:
            return i + 1
    return None


def split_top_level(text: str, sep: str = ",", quotes: str = PYTHON_QUOTES) -> list[str]:
    """Split on ``sep`` where it is outside strings and nested brackets.

    Empty pieces are dropped and the rest are stripped.
    """
    pieces: list[str] = []
    last = 0
    for i, ch, depth in iter_unquoted(text, 0, quotes):
        if ch == sep and depth == 0:
            pieces.append(text[last:i])
            last = i + 1
    pieces.append(text[last:])
    return [p.strip() for p in pieces if p.strip()]


def unclosed(text: str, quotes: str = JSON_QUOTES) -> tuple[list[str], str | None]:
    """Return the stack of unclosed openers and the open quote, if any.

    The stack is innermost-last, so closing it in reverse order balances the
    structure.
    """
    stack: list[str] = []
    quote: str | None = None
    escaped = False

    for ch in text:
        if quote is not None:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in quotes:
            quote = ch
        elif ch in "{[":
            stack.append(ch)
        elif ch in "}]" and stack:
            stack.pop()

    return stack, quote


def outer_braces(text: str, opener: str = "{", closer: str = "}") -> tuple[int, int] | None:
    """Return the ``[first opener, last closer]`` range as a half-open pair."""
    first = text.find(opener)
    last = text.rfind(closer)
    if first != -1 and last > first:
        return first, last + 1
    return None


def iter_delimited(
    text: str,
    start_marker: str,
    end_marker: str,
    ignore_case: bool = False,
) -> Iterator[Delimited]:
    """Yield every ``start_marker ... end_marker`` region, left to right.

    Regions do not nest: each start marker pairs with the next end marker.
    """
    flags = re.IGNORECASE if ignore_case else 0
    start_re = re.compile(re.escape(start_marker), flags)
    end_re = re.compile(re.escape(end_marker), flags)

    pos = 0
    while True:
        opening = start_re.search(text, pos)
        if opening is None:
            return
        closing = end_re.search(text, opening.end())
        if closing is None:
            return
        yield Delimited(
            start=opening.start(),
            end=closing.end(),
            inner=text[opening.end():closing.start()],
        )
        pos = closing.end()


def _fence_opener(labels: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(label) for label in sorted(labels, key=len, reverse=True))
    return re.compile(r"```(" + alternatives + r")[ \t]*\n?")


def iter_fenced_blocks(text: str, labels: tuple[str, ...]) -> Iterator[FencedBlock]:
    """Yield code fences whose opening fence carries one of ``labels``.

    A block runs from its opening fence to the next triple backtick. Blocks
    without a closing fence are not reported.
    """
    opener = _fence_opener(labels)
    pos = 0
    while True:
        opening = opener.search(text, pos)
        if opening is None:
            return
        close = text.find("```", opening.end())
        if close == -1:
            return
        yield FencedBlock(
            start=opening.start(),
            end=close + 3,
            label=opening.group(1),
            body=text[opening.end():close],
        )
        pos = close + 3
