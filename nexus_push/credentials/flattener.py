"""Lenient flattening of indentation-based YAML documents.

Turns a document such as Helm's ``repositories.yaml``::

    apiVersion: v1
    repositories:
    - name: nexus
      url: https://nexus.example.com/repository/helm/
      username: alice
      password: "secret"

into flat ``(path, value)`` entries::

    ("apiVersion",)                           -> "v1"
    ("repositories", "1", "name")             -> "nexus"
    ("repositories", "1", "url")              -> "https://nexus.example.com/repository/helm/"
    ("repositories", "1", "username")         -> "alice"
    ("repositories", "1", "password")         -> "secret"

List items get a 1-based positional segment. Inline collections
(``key: [a, b]``, ``- {k: v}``, ``- [a, b]``) are exploded into block lines first, so
``repositories: [{name: nexus, username: alice}]`` flattens the same way.

This is best-effort, not a YAML parser: anchors, block scalars, multiple
documents and other constructs are not understood, and lines that do not fit
the expected shape are dropped without error.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

KEY_PATTERN = re.compile(r"^(?P<key>[A-Za-z0-9_][\w.-]*)\s*:(?:\s+(?P<value>.*?))?\s*$")
QUOTED_PATTERN = re.compile(r"""^(?P<quote>["'])(?P<text>.*)(?P=quote)(?:\s+#.*)?$""")
DOCUMENT_MARKERS = ("---", "...")


@dataclass(frozen=True)
class FlatEntry:
    """A scalar leaf and the chain of keys/indices leading to it."""

    path: tuple[str, ...]
    value: str

    @property
    def key(self) -> str:
        """Underscore-joined path, e.g. ``repositories_1_name``."""
        return "_".join(self.path)

    @property
    def dotted(self) -> str:
        """Dot-joined path, e.g. ``repositories.1.name``."""
        return ".".join(self.path)


@dataclass
class _Frame:
    indent: int
    segment: str
    is_item: bool


def _at_value_start(current: list[str]) -> bool:
    text = "".join(current)
    stripped = text.rstrip()
    if not stripped or stripped[-1] in "[{,":
        return True
    return stripped[-1] == ":" and stripped != text


def split_flow_items(text: str) -> list[str]:
    """Split the inside of ``[...]`` or ``{...}`` on top-level commas.

    Commas inside nested brackets or quotes do not split. A quote only opens
    a quoted span where a value starts, so ``o'brien`` stays a plain scalar.
    Empty items (trailing commas) are dropped.
    """
    items: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None

    for char in text:
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'" and _at_value_start(current):
            quote = char
        elif char in "[{":
            depth += 1
        elif char in "]}":
            depth -= 1
        elif char == "," and depth == 0:
            items.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    items.append("".join(current).strip())
    return [item for item in items if item]


def _is_flow(value: str, opening: str, closing: str) -> bool:
    return len(value) >= 2 and value[0] == opening and value[-1] == closing


def _explode_line(line: str) -> list[str]:
    body = line.lstrip(" ")
    pad = " " * (len(line) - len(body))
    child_pad = pad + "  "

    if body == "-" or body.startswith("- "):
        rest = body[1:].strip()
        if _is_flow(rest, "{", "}"):
            exploded = [f"{pad}-"]
            for item in split_flow_items(rest[1:-1]):
                exploded.extend(_explode_line(child_pad + item))
            return exploded
        if _is_flow(rest, "[", "]"):
            exploded = [f"{pad}-"]
            for item in split_flow_items(rest[1:-1]):
                exploded.extend(_explode_line(f"{child_pad}- {item}"))
            return exploded
        match = KEY_PATTERN.match(rest)
        value = match.group("value") if match else None
        if value and (_is_flow(value, "[", "]") or _is_flow(value, "{", "}")):
            return [f"{pad}-", *_explode_line(child_pad + rest)]
        return [line]

    match = KEY_PATTERN.match(body)
    if match is None or not match.group("value"):
        return [line]

    key, value = match.group("key"), match.group("value")
    if _is_flow(value, "[", "]"):
        exploded = [f"{pad}{key}:"]
        for item in split_flow_items(value[1:-1]):
            exploded.extend(_explode_line(f"{child_pad}- {item}"))
        return exploded
    if _is_flow(value, "{", "}"):
        exploded = [f"{pad}{key}:"]
        for item in split_flow_items(value[1:-1]):
            exploded.extend(_explode_line(child_pad + item))
        return exploded
    return [line]


def explode_flow_collections(lines: Iterable[str]) -> list[str]:
    """Rewrite inline ``[...]`` lists and ``{...}`` mappings as block lines."""
    exploded: list[str] = []
    for line in lines:
        exploded.extend(_explode_line(line.rstrip()))
    return exploded


def parse_scalar(raw: str) -> str | None:
    """Strip quotes or a trailing comment from a scalar.

    Returns None when nothing but a comment is left, which callers treat as
    "no value".
    """
    quoted = QUOTED_PATTERN.match(raw)
    if quoted:
        text = quoted.group("text")
        if quoted.group("quote") == "'":
            text = text.replace("''", "'")
        return text

    if raw.startswith("#"):
        return None
    comment = raw.find(" #")
    if comment != -1:
        raw = raw[:comment].rstrip()
    return raw or None


def _open_item(stack: list[_Frame], indent: int) -> None:
    while stack and stack[-1].indent > indent:
        stack.pop()

    number = 1
    if stack and stack[-1].indent == indent:
        if stack[-1].is_item:
            number = int(stack.pop().segment) + 1
        # otherwise the parent key sits in the same column: an indentless list

    stack.append(_Frame(indent, str(number), True))


def _close_siblings(stack: list[_Frame], indent: int) -> None:
    while stack and stack[-1].indent >= indent:
        stack.pop()


def flatten(text: str) -> list[FlatEntry]:
    """Flatten a document into ``FlatEntry`` values in document order.

    Args:
        text: Raw document text

    Returns:
        One entry per scalar leaf. An empty document gives an empty list.
    """
    entries: list[FlatEntry] = []
    stack: list[_Frame] = []

    def emit(key: str | None, value: str) -> None:
        path = [frame.segment for frame in stack]
        if key is not None:
            path.append(key)
        entries.append(FlatEntry(tuple(path), value))

    def add_key(indent: int, body: str) -> bool:
        match = KEY_PATTERN.match(body)
        if match is None:
            return False
        _close_siblings(stack, indent)
        raw_value = match.group("value")
        value = parse_scalar(raw_value) if raw_value else None
        if value is None:
            stack.append(_Frame(indent, match.group("key"), False))
        else:
            emit(match.group("key"), value)
        return True

    for line in explode_flow_collections(text.splitlines()):
        body = line.lstrip(" ")
        if not body or body.startswith("#"):
            continue
        if body.startswith("\t") or body.split(" ", 1)[0] in DOCUMENT_MARKERS:
            logger.debug(f"Skipping unsupported line: {line!r}")
            continue

        indent = len(line) - len(body)

        if body == "-" or body.startswith("- "):
            _open_item(stack, indent)
            rest = body[1:].lstrip()
            if not rest:
                continue
            key_indent = indent + len(body) - len(rest)
            if not add_key(key_indent, rest):
                value = parse_scalar(rest)
                if value is not None:
                    emit(None, value)
            continue

        if not add_key(indent, body):
            logger.debug(f"Skipping malformed line: {line!r}")

    return entries


def flatten_to_mapping(text: str, separator: str = "_") -> dict[str, str]:
    """Flatten a document into a ``joined path -> value`` dict.

    Later duplicates of the same path overwrite earlier ones.
    """
    return {separator.join(entry.path): entry.value for entry in flatten(text)}
