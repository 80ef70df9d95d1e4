"""A minimal, non-strict JSON tokenizer producing positional tokens."""

from dataclasses import dataclass
from enum import IntEnum

DEFAULT_MAX_TOKENS = 4000

_SKIP = "\t\r\n:, "
_PRIMITIVE_END = ":\t\r\n ,]}"
_ESCAPES = '"/\\bfrntu'


class TokenType(IntEnum):
    """Kind of a JSON token."""

    PRIMITIVE = 0
    OBJECT = 1
    ARRAY = 2
    STRING = 3


@dataclass
class Token:
    """A span of the input; ``size`` counts direct children of containers.

    For an object, keys and values are both counted as children.
    """

    type: TokenType
    start: int = -1
    end: int = -1
    size: int = 0

    @property
    def is_open(self) -> bool:
        return self.start != -1 and self.end == -1


class JsmnError(ValueError):
    """Base class for tokenizer failures."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at position {position}")
        self.position = position


class TokenLimitError(JsmnError):
    """More tokens were needed than the parser allows."""


class InvalidJsonError(JsmnError):
    """The input holds a character or structure that cannot be parsed."""


class PartialJsonError(JsmnError):
    """The input ended before the JSON text was complete."""


class Parser:
    """Splits JSON text into tokens, holding at most ``max_tokens`` of them."""

    def __init__(self, max_tokens: int = DEFAULT_MAX_TOKENS) -> None:
        self.max_tokens = max_tokens
        self.pos = 0
        self.tokens: list[Token] = []
        self.toksuper = -1
        self._js = ""
        self._end = 0

    def parse(self, js: str) -> list[Token]:
        """Tokenize ``js`` from the start; a NUL character ends the input."""
        self.pos = 0
        self.tokens = []
        self.toksuper = -1
        self._js = js
        nul = js.find("\0")
        self._end = len(js) if nul < 0 else nul

        while self.pos < self._end:
            ch = js[self.pos]
            if ch in "{[":
                self._open(TokenType.OBJECT if ch == "{" else TokenType.ARRAY)
            elif ch in "}]":
                self._close(TokenType.OBJECT if ch == "}" else TokenType.ARRAY)
            elif ch == '"':
                self._parse_string()
                self._count_child()
            elif ch in _SKIP:
                pass
            else:
                self._parse_primitive()
                self._count_child()
            self.pos += 1

        for token in reversed(self.tokens):
            if token.is_open:
                raise PartialJsonError("unclosed object or array", token.start)
        return list(self.tokens)

    def _alloc(self, kind: TokenType, reset_to: int | None = None) -> Token:
        if len(self.tokens) >= self.max_tokens:
            if reset_to is not None:
                self.pos = reset_to
            raise TokenLimitError(f"more than {self.max_tokens} tokens", self.pos)
        token = Token(kind)
        self.tokens.append(token)
        return token

    def _count_child(self) -> None:
        if self.toksuper != -1:
            self.tokens[self.toksuper].size += 1

    def _open(self, kind: TokenType) -> None:
        token = self._alloc(kind)
        self._count_child()
        token.start = self.pos
        self.toksuper = len(self.tokens) - 1

    def _close(self, kind: TokenType) -> None:
        for index in range(len(self.tokens) - 1, -1, -1):
            token = self.tokens[index]
            if token.is_open:
                if token.type != kind:
                    raise InvalidJsonError("mismatched closing bracket", self.pos)
                token.end = self.pos + 1
                break
        else:
            raise InvalidJsonError("unmatched closing bracket", self.pos)
        self.toksuper = next(
            (j for j in range(index - 1, -1, -1) if self.tokens[j].is_open), -1
        )

    def _parse_primitive(self) -> None:
        js, start = self._js, self.pos
        while self.pos < self._end:
            ch = js[self.pos]
            if ch in _PRIMITIVE_END:
                break
            if not 32 <= ord(ch) < 127:
                self.pos = start
                raise InvalidJsonError("invalid character in primitive", start)
            self.pos += 1
        token = self._alloc(TokenType.PRIMITIVE, reset_to=start)
        token.start, token.end = start, self.pos
        self.pos -= 1

    def _parse_string(self) -> None:
        js, start = self._js, self.pos
        self.pos += 1
        while self.pos < self._end:
            ch = js[self.pos]
            if ch == '"':
                token = self._alloc(TokenType.STRING, reset_to=start)
                token.start, token.end = start + 1, self.pos
                return
            if ch == "\\":
                self.pos += 1
                escaped = js[self.pos] if self.pos < self._end else "\0"
                if escaped not in _ESCAPES:
                    self.pos = start
                    raise InvalidJsonError("invalid escape in string", start)
            self.pos += 1
        self.pos = start
        raise PartialJsonError("unterminated string", start)


def tokenize(js: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> list[Token]:
    """Tokenize ``js`` with a fresh :class:`Parser`."""
    return Parser(max_tokens).parse(js)