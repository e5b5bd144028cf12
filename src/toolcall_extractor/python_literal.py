"""Parsing of Python-style call syntax emitted by some models.

Handles shapes such as::

    search_legs(departure="Nice", max_days=5)
    default_api.search_legs(departure_bbox={"min_lng": 1.2}, flexible=True)
    print(default_api.get_weather(city="Brest"))

Arguments may be JSON-ish or Python-literal dicts (``None``/``True``/``False``,
unquoted or single-quoted keys, ``key=value`` pairs). When the converted text
still is not valid JSON, a pair-by-pair parser recovers what it can.
"""

import json
import re
from typing import Any, Collection, NamedTuple

from loguru import logger

from toolcall_extractor.config import DEFAULT_PLACE_NAME_DENYLIST
from toolcall_extractor.scanning import PYTHON_QUOTES, find_balanced, split_top_level


class PythonCall(NamedTuple):
    """Name and arguments of a parsed Python-style call."""
    name: str
    arguments: dict[str, Any]


_PRINT_PREFIX = re.compile(r"print\s*\(\s*")
_CALL_HEAD = re.compile(r"(?:\w+\.)?(\w+)\s*\(")

_LITERALS = {"None": "null", "True": "true", "False": "false"}

_PAIR = re.compile(
    r"""^(?P<q>["']?)(?P<key>[a-z_][a-z0-9_]*)(?P=q)\s*[:=]\s*(?P<value>.+)$""",
    re.IGNORECASE | re.DOTALL,
)
_INT = re.compile(r"^-?[0-9]+$")
_DECIMAL = re.compile(r"^-?[0-9]+\.[0-9]+$")


def _match_call(text: str, pos: int) -> tuple[str, str] | None:
    """Match ``[prefix.]name(args)[)]`` from ``pos`` to the end of ``text``."""
    head = _CALL_HEAD.match(text, pos)
    if head is None:
        return None

    paren = head.end() - 1
    close = find_balanced(text, paren, PYTHON_QUOTES)
    if close is None:
        return None

    # One stray closing paren is tolerated for print(...) wrappers.
    if text[close:].strip() not in ("", ")"):
        return None

    return head.group(1), text[paren + 1:close - 1].strip()


def _looks_like_proper_noun(name: str) -> bool:
    return "_" not in name and name == name[:1].upper() + name[1:].lower()


def parse_python_call(
    text: str,
    denylist: Collection[str] = DEFAULT_PLACE_NAME_DENYLIST,
) -> PythonCall | None:
    """Parse a whole string as a single Python-style function call.

    The call must span the entire trimmed input; incidental parentheses inside
    prose never match.

    Args:
        text: Candidate text, e.g. the body of a fenced block.
        denylist: Lower-cased names that are never accepted as functions.

    Returns:
        PythonCall, or None when the text is not call-shaped or the name looks
        like a proper noun.
    """
    stripped = text.strip()
    if not stripped:
        return None

    matched = None
    prefix = _PRINT_PREFIX.match(stripped)
    if prefix is not None:
        matched = _match_call(stripped, prefix.end())
    if matched is None:
        matched = _match_call(stripped, 0)
    if matched is None:
        return None

    name, args_text = matched

    if name.lower() in denylist:
        logger.debug("[python-call] rejecting place name {!r}", name)
        return None

    if _looks_like_proper_noun(name):
        logger.debug("[python-call] rejecting capitalised word {!r} (likely a proper noun)", name)
        return None

    if not args_text:
        return PythonCall(name, {})

    try:
        arguments = parse_python_dict(args_text)
    except (ValueError, RecursionError) as e:
        logger.debug("[python-call] failed to parse arguments of {}: {}", name, e)
        return None

    return PythonCall(name, arguments)


def _strip_outer_braces(text: str) -> str:
    content = text.strip()
    if content.startswith("{") and content.endswith("}"):
        content = content[1:-1].strip()
    return content


def _to_json_text(content: str) -> str:
    """Rewrite Python-literal syntax as JSON outside of string literals.

    Replaces ``None``/``True``/``False`` as whole words, double-quotes bare
    keys followed by ``:`` or ``=`` and converts single-quoted strings to
    double-quoted ones. Text inside quotes is copied verbatim.
    """
    out: list[str] = []
    n = len(content)
    i = 0
    expect_key = True

    while i < n:
        ch = content[i]

        if ch in PYTHON_QUOTES:
            j = i + 1
            while j < n and content[j] != ch:
                j += 2 if content[j] == "\\" else 1
            if j >= n:
                # Unterminated string; leave the rest for the fallback parser.
                out.append(content[i:])
                break
            body = content[i + 1:j]
            if ch == "'":
                body = body.replace("\\'", "'").replace('"', '\\"')
            out.append('"' + body + '"')
            i = j + 1
            expect_key = False
            continue

        if ch.isalpha() or ch == "_":
            j = i
            while j < n and (content[j].isalnum() or content[j] == "_"):
                j += 1
            word = content[i:j]

            if expect_key:
                k = j
                while k < n and content[k].isspace():
                    k += 1
                if k < n and content[k] in ":=":
                    out.append(f'"{word}":')
                    i = k + 1
                    expect_key = False
                    continue

            out.append(_LITERALS.get(word, word))
            i = j
            expect_key = False
            continue

        if ch in "{,":
            expect_key = True
        elif not ch.isspace():
            expect_key = False
        out.append(ch)
        i += 1

    return "".join(out)


def parse_python_dict(python_str: str) -> dict[str, Any]:
    """Convert Python dict or keyword-argument syntax to a dictionary.

    Handles ``{"key": "value"}``, ``{key: 'value'}`` and ``key=value, other=1``.
    Falls back to :func:`parse_python_dict_manual` when the converted text is
    still not valid JSON.
    """
    content = _strip_outer_braces(python_str)
    if not content:
        return {}

    converted = _to_json_text(content)
    if not converted.lstrip().startswith("{"):
        converted = "{" + converted + "}"

    try:
        parsed = json.loads(converted)
    except json.JSONDecodeError:
        parsed = None

    if isinstance(parsed, dict):
        return parsed

    logger.debug("[python-dict] JSON conversion failed, using pair parser")
    return parse_python_dict_manual(python_str)


def parse_python_dict_manual(python_str: str) -> dict[str, Any]:
    """Parse ``key: value`` / ``key=value`` pairs one at a time.

    Pairs that do not look like ``key: value`` are skipped, so a single bad
    pair never loses the others.
    """
    result: dict[str, Any] = {}
    content = _strip_outer_braces(python_str)
    if not content:
        return result

    for pair in split_top_level(content, ",", PYTHON_QUOTES):
        match = _PAIR.match(pair)
        if match is None:
            continue
        result[match.group("key")] = coerce_literal(match.group("value").strip())

    return result


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in PYTHON_QUOTES:
        return text[1:-1]
    return text


def coerce_literal(value: str) -> Any:
    """Best-effort typing of a single Python/JSON literal.

    Order: quoted string, integer, decimal, boolean, null, nested dict, list,
    then the raw text.
    """
    if len(value) >= 2 and value[0] == value[-1] and value[0] in PYTHON_QUOTES:
        return value[1:-1]
    if _INT.match(value):
        return int(value)
    if _DECIMAL.match(value):
        return float(value)
    if value in ("True", "true"):
        return True
    if value in ("False", "false"):
        return False
    if value in ("None", "null"):
        return None
    if value.startswith("{") and value.endswith("}"):
        try:
            return parse_python_dict(value)
        except (ValueError, RecursionError):
            return value
    if value.startswith("[") and value.endswith("]"):
        return [_unquote(item) for item in split_top_level(value[1:-1], ",", PYTHON_QUOTES)]
    return value
