"""Streaming reader for files holding one top-level JSON array of objects.

Each object in the array is read in turn, tokenized, and then queried by
token index through the reader's accessor methods.
"""

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import IO, Iterator

from .jsmn import DEFAULT_MAX_TOKENS, JsmnError, Token, TokenType, tokenize

_WHITESPACE = "\t\r\n "
_MASK32 = 0xFFFFFFFF


class ValueKind(Enum):
    """Kind of value a token holds."""

    TRUE = auto()
    FALSE = auto()
    NULL = auto()
    UINT = auto()
    SINT = auto()
    REAL = auto()
    STRING = auto()
    ARRAY = auto()
    OBJECT = auto()


@dataclass
class TokenValue:
    """The decoded value of one token.

    Numbers fill ``uint``, ``sint`` and ``real`` together; ``kind`` says
    which of them the text actually denotes. Strings keep their raw text,
    escapes included.
    """

    kind: ValueKind
    text: str | None = None
    uint: int = 0
    sint: int = 0
    real: float = 0.0


class JsonStreamError(ValueError):
    """The JSON stream is malformed or lacks a requested member."""


def skip_object(tokens: list[Token], index: int) -> int:
    """Return the index of the token following the value at ``index``."""
    token = tokens[index]
    if token.type in (TokenType.PRIMITIVE, TokenType.STRING):
        return index + 1
    index += 1
    for _ in range(token.size):
        index = skip_object(tokens, index)
    return index


def _wrap_int32(value: int) -> int:
    return ((value + 0x80000000) & _MASK32) - 0x80000000


def _pow10(exponent: int) -> float:
    try:
        return 10.0 ** exponent
    except OverflowError:
        return math.inf


def _number_value(text: str) -> TokenValue:
    pos, top = 0, len(text)
    negative = text.startswith("-")
    kind = ValueKind.SINT if negative else ValueKind.UINT
    if negative:
        pos += 1

    magnitude = 0
    real = 0.0
    while pos < top and text[pos].isdigit() and text[pos].isascii():
        digit = ord(text[pos]) - ord("0")
        magnitude = magnitude * 10 + digit
        real = real * 10 + digit
        pos += 1

    if pos < top and text[pos] == ".":
        pos += 1
        kind = ValueKind.REAL
        frac = 0.1
        while pos < top and text[pos].isdigit() and text[pos].isascii():
            real += frac * (ord(text[pos]) - ord("0"))
            frac *= 0.1
            pos += 1

    if pos < top and text[pos] in "Ee":
        pos += 1
        kind = ValueKind.REAL
        exp_negative = False
        if pos < top and text[pos] in "+-":
            exp_negative = text[pos] == "-"
            pos += 1
        exponent = 0
        while pos < top and text[pos].isdigit() and text[pos].isascii():
            exponent = exponent * 10 + ord(text[pos]) - ord("0")
            pos += 1
        real *= _pow10(-exponent if exp_negative else exponent)

    sint = -magnitude if negative else magnitude
    return TokenValue(
        kind,
        uint=magnitude & _MASK32,
        sint=_wrap_int32(sint),
        real=-real if negative else real,
    )


class JsonArrayReader:
    """Reads the objects of a top-level JSON array from a seekable text stream."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream
        self._pushback: str | None = None
        self.buffer = ""
        self.tokens: list[Token] = []

    def _read(self) -> str:
        if self._pushback is not None:
            ch, self._pushback = self._pushback, None
            return ch
        return self._stream.read(1)

    def _next_char(self) -> str:
        """Return the next non-whitespace character, or '' at end of stream."""
        while True:
            ch = self._read()
            if ch == "" or ch not in _WHITESPACE:
                return ch

    def reset(self) -> bool:
        """Rewind to the start of the array; return whether it holds objects."""
        self._stream.seek(0)
        self._pushback = None
        if self._next_char() != "[":
            raise JsonStreamError("expecting '[' to start array")
        ch = self._next_char()
        if ch == "]":
            return False
        self._pushback = ch
        return True

    def next_object(self) -> bool:
        """Read and tokenize the next object; return whether more follow."""
        if self._next_char() != "{":
            raise JsonStreamError("expecting '{' to start object")

        parts = ["{"]
        nest = 1
        while nest > 0:
            ch = self._read()
            if ch == "":
                raise JsonStreamError("JSON file ended prematurely")
            parts.append(ch)
            if ch == "{":
                nest += 1
            elif ch == "}":
                nest -= 1
        self.buffer = "".join(parts)

        ch = self._next_char()
        if ch == "]":
            more = False
            if self._next_char() != "":
                raise JsonStreamError("JSON file had unexpected data following array")
        elif ch == ",":
            more = True
        else:
            raise JsonStreamError("expecting ',' or ']' after object")

        try:
            self.tokens = tokenize(self.buffer, DEFAULT_MAX_TOKENS)
        except JsmnError as exc:
            raise JsonStreamError("error parsing JSON") from exc
        return more

    def count_entries(self) -> int:
        """Count the objects in the array, reading the stream from the start."""
        count = 0
        more = self.reset()
        while more:
            more = self.next_object()
            count += 1
        return count

    def __iter__(self) -> Iterator[list[Token]]:
        """Yield the tokens of each object in turn, from the start of the array."""
        more = self.reset()
        while more:
            more = self.next_object()
            yield self.tokens

    def token_value(self, index: int) -> TokenValue:
        """Decode the token at ``index`` of the current object."""
        token = self.tokens[index]
        text = self.buffer[token.start:token.end]
        if token.type == TokenType.STRING:
            return TokenValue(ValueKind.STRING, text=text)
        if token.type == TokenType.ARRAY:
            return TokenValue(ValueKind.ARRAY)
        if token.type == TokenType.OBJECT:
            return TokenValue(ValueKind.OBJECT)
        first = text[:1]
        if first == "t":
            return TokenValue(ValueKind.TRUE)
        if first == "f":
            return TokenValue(ValueKind.FALSE)
        if first == "n":
            return TokenValue(ValueKind.NULL)
        return _number_value(text)

    def get_array_member(self, array_index: int, wanted_member: int) -> tuple[int, TokenValue]:
        """Return the token index and value of element ``wanted_member`` of an array."""
        array = self.tokens[array_index]
        if array.type != TokenType.ARRAY:
            raise JsonStreamError("expecting an array")
        index = array_index + 1
        for position in range(array.size):
            if position == wanted_member:
                return index, self.token_value(index)
            index = skip_object(self.tokens, index)
        raise JsonStreamError("array does not have member")

    def get_object_member(self, object_index: int, wanted_member: str) -> tuple[int, TokenValue]:
        """Return the token index and value of member ``wanted_member`` of an object."""
        obj = self.tokens[object_index]
        if obj.type != TokenType.OBJECT:
            raise JsonStreamError("expecting an object")
        index = object_index + 1
        remaining = obj.size
        while remaining >= 2:
            key = self.token_value(index)
            if key.kind != ValueKind.STRING:
                raise JsonStreamError("expecting a string for object member name")
            index = skip_object(self.tokens, index)
            if key.text == wanted_member:
                return index, self.token_value(index)
            index = skip_object(self.tokens, index)
            remaining -= 2
        raise JsonStreamError(f"object does not have member: {wanted_member}")

    def get_object_member_value(
        self, object_index: int, wanted_member: str, wanted_kind: ValueKind
    ) -> TokenValue:
        """Return a member's value, which must be of ``wanted_kind``."""
        _, value = self.get_object_member(object_index, wanted_member)
        if value.kind != wanted_kind:
            raise JsonStreamError("object member value is of wrong kind")
        return value

    def get_object_member_boolean(self, object_index: int, wanted_member: str) -> bool:
        """Return a member's value, which must be true or false."""
        _, value = self.get_object_member(object_index, wanted_member)
        if value.kind not in (ValueKind.TRUE, ValueKind.FALSE):
            raise JsonStreamError("object member value is of non-boolean kind")
        return value.kind == ValueKind.TRUE

    def get_object_member_token(
        self, object_index: int, wanted_member: str, wanted_type: TokenType
    ) -> int:
        """Return the token index of a member, whose token must be of ``wanted_type``."""
        index, _ = self.get_object_member(object_index, wanted_member)
        if self.tokens[index].type != wanted_type:
            raise JsonStreamError("object member token is of wrong type")
        return index

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> "JsonArrayReader":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def open_json_file(filename: str) -> JsonArrayReader:
    """Open ``filename`` for reading as a JSON array of objects."""
    try:
        stream = open(filename, "r", encoding="utf-8")
    except OSError as exc:
        raise JsonStreamError(f"can't open file '{filename}' for reading") from exc
    return JsonArrayReader(stream)