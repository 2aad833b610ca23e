"""JSON Gateway - parses JSON(C) configuration files into position-aware documents."""

import json
from typing import Any

from spfx_doctor.domain.entities import Position
from spfx_doctor.domain.errors import JsonParseError
from spfx_doctor.domain.project import JsonDocument, JsonNode, JsonProperty

_WHITESPACE = " \t\r\n\ufeff"
_LITERALS: dict[str, Any] = {"true": True, "false": False, "null": None}
_NUMBER_CHARS = "+-0123456789.eE"


class _Parser:
    """
    Recursive-descent parser over one source text.

    Accepts strict JSON plus // and /* */ comments and trailing commas in
    objects and arrays (tsconfig.json style). Lines and characters are
    1-based.
    """

    def __init__(self, text: str, path: str) -> None:
        self.text = text
        self.path = path
        self.index = 0
        self.line = 1
        self.character = 1

    def error(self, message: str) -> JsonParseError:
        return JsonParseError(message, self.line, self.character, self.path)

    def position(self) -> Position:
        return Position(line=self.line, character=self.character)

    def peek(self) -> str:
        return self.text[self.index] if self.index < len(self.text) else ""

    def advance(self, count: int = 1) -> None:
        for _ in range(count):
            if self.index >= len(self.text):
                return
            if self.text[self.index] == "\n":
                self.line += 1
                self.character = 1
            else:
                self.character += 1
            self.index += 1

    def skip_trivia(self) -> None:
        while self.index < len(self.text):
            ch = self.text[self.index]
            if ch in _WHITESPACE:
                self.advance()
            elif self.text.startswith("//", self.index):
                while self.index < len(self.text) and self.text[self.index] != "\n":
                    self.advance()
            elif self.text.startswith("/*", self.index):
                end = self.text.find("*/", self.index + 2)
                if end == -1:
                    raise self.error("Unterminated comment")
                self.advance(end + 2 - self.index)
            else:
                return

    def expect(self, ch: str) -> None:
        if self.peek() != ch:
            found = self.peek() or "end of input"
            raise self.error(f"Expected '{ch}' but found '{found}'")
        self.advance()

    def parse_document(self) -> JsonNode:
        self.skip_trivia()
        if self.index >= len(self.text):
            raise self.error("Empty document")
        node = self.parse_value()
        self.skip_trivia()
        if self.index < len(self.text):
            raise self.error(f"Unexpected '{self.peek()}' after document end")
        return node

    def parse_value(self) -> JsonNode:
        self.skip_trivia()
        ch = self.peek()
        if ch == "{":
            return self.parse_object()
        if ch == "[":
            return self.parse_array()
        if ch == '"':
            start = self.position()
            return JsonNode(kind="string", position=start, value=self.parse_string())
        if ch == "-" or ch.isdigit():
            return self.parse_number()
        for literal, value in _LITERALS.items():
            if self.text.startswith(literal, self.index):
                start = self.position()
                self.advance(len(literal))
                kind = "null" if value is None else "boolean"
                return JsonNode(kind=kind, position=start, value=value)
        raise self.error(f"Unexpected '{ch or 'end of input'}'")

    def parse_object(self) -> JsonNode:
        start = self.position()
        self.expect("{")
        properties: dict[str, JsonProperty] = {}
        value: dict[str, Any] = {}
        self.skip_trivia()
        while self.peek() != "}":
            if self.peek() != '"':
                raise self.error("Expected property name")
            key_position = self.position()
            key = self.parse_string()
            self.skip_trivia()
            self.expect(":")
            child = self.parse_value()
            properties[key] = JsonProperty(key_position=key_position, value=child)
            value[key] = child.value
            self.skip_trivia()
            if self.peek() == ",":
                self.advance()
                self.skip_trivia()
            elif self.peek() != "}":
                raise self.error("Expected ',' or '}'")
        self.advance()
        return JsonNode(kind="object", position=start, value=value, properties=properties)

    def parse_array(self) -> JsonNode:
        start = self.position()
        self.expect("[")
        items: list[JsonNode] = []
        self.skip_trivia()
        while self.peek() != "]":
            if not self.peek():
                raise self.error("Unterminated array")
            items.append(self.parse_value())
            self.skip_trivia()
            if self.peek() == ",":
                self.advance()
                self.skip_trivia()
            elif self.peek() != "]":
                raise self.error("Expected ',' or ']'")
        self.advance()
        return JsonNode(kind="array", position=start, value=[i.value for i in items], items=items)

    def parse_string(self) -> str:
        begin = self.index
        self.expect('"')
        while True:
            ch = self.peek()
            if not ch or ch == "\n":
                raise self.error("Unterminated string")
            if ch == "\\":
                self.advance(2)
                continue
            self.advance()
            if ch == '"':
                break
        try:
            return json.loads(self.text[begin:self.index])
        except ValueError as e:
            raise self.error(f"Invalid string: {e}") from e

    def parse_number(self) -> JsonNode:
        start = self.position()
        begin = self.index
        while self.peek() and self.peek() in _NUMBER_CHARS:
            self.advance()
        raw = self.text[begin:self.index]
        try:
            value = json.loads(raw)
        except ValueError as e:
            raise JsonParseError(f"Invalid number '{raw}'", start.line, start.character, self.path) from e
        return JsonNode(kind="number", position=start, value=value)


class JsonGateway:
    """Infrastructure parser for the project's JSON(C) documents."""

    def parse(self, text: str, path: str = "") -> JsonDocument:
        """Parse text into a JsonDocument. Raises JsonParseError on malformed input."""
        root = _Parser(text, path).parse_document()
        return JsonDocument(path=path, source=text, data=root.value, root=root)

    def parse_data(self, text: str, path: str = "") -> JsonDocument:
        """
        Parse strict JSON through json.loads, without positions.

        For large documents that rules read but never locate in
        (package-lock.json). locate() on the result always answers 1:1.
        """
        try:
            data = json.loads(text.lstrip("\ufeff"))
        except json.JSONDecodeError as e:
            raise JsonParseError(e.msg, e.lineno, e.colno, path) from e
        root = JsonNode(kind=_kind_of(data), position=Position(line=1, character=1), value=data)
        return JsonDocument(path=path, source=text, data=data, root=root)


def _kind_of(value: Any) -> str:
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "boolean"
    if value is None:
        return "null"
    return "number"
