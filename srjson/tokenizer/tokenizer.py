import re
from typing import Iterator

from srjson.errors import StringLexFailure, UnrecognizedTokenError
from srjson.grammar.core import (
    ARRAY_END,
    ARRAY_START,
    BOOL_LITERAL,
    COLON,
    COMMA,
    DIGITS,
    EXP_MARKER,
    FRACTION_SYMBOL,
    NULL_LITERAL,
    OBJECT_END,
    OBJECT_START,
    SIGN,
    STRING_LITERAL,
    Loc,
    Terminal,
)

WHITESPACE = frozenset(" \t\n")

SPECIAL_SYMBOLS: dict[str, Terminal] = {
    "{": OBJECT_START,
    "}": OBJECT_END,
    "[": ARRAY_START,
    "]": ARRAY_END,
    ",": COMMA,
    ":": COLON,
    ".": FRACTION_SYMBOL,
    "e": EXP_MARKER,
    "E": EXP_MARKER,
    "+": SIGN,
    "-": SIGN,
}

# keyed by the leading character; a keyword must match in full
KEYWORDS: dict[str, tuple[str, Terminal]] = {
    "t": ("true", BOOL_LITERAL),
    "f": ("false", BOOL_LITERAL),
    "n": ("null", NULL_LITERAL),
}

ESCAPES = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

DIGIT_RUN = re.compile(r"[0-9]+")


class Tokenizer:
    def __init__(self, filename: str = "(void)"):
        self._filename = filename
        self._code = ""
        self._linenum = 0
        self._column = 0
        self._code_offset = 0

    def _reset(self, code: str):
        self._code = code
        self._linenum = 0
        self._column = 0
        self._code_offset = 0

    def _loc(self) -> Loc:
        return Loc(self._filename, self._linenum, self._column, self._code_offset)

    def _to_next_char(self):
        if self._current_char() == "\n":
            self._linenum += 1
            self._column = 0
        else:
            self._column += 1
        self._code_offset += 1

    def _skip_n_chars(self, n):
        # only used for runs that cannot contain newlines
        self._code_offset += n
        self._column += n

    def _current_char(self):
        return self._code[self._code_offset]

    def _at_end(self) -> bool:
        return self._code_offset >= len(self._code)

    def _tokenize(self) -> Iterator[Terminal]:
        while not self._at_end():
            token_location = self._loc()
            char = self._current_char()
            if char in WHITESPACE:
                self._to_next_char()
                continue
            if char in SPECIAL_SYMBOLS:
                token = Terminal(SPECIAL_SYMBOLS[char].token_type, char, token_location)
                self._to_next_char()
            elif (digits := DIGIT_RUN.match(self._code, self._code_offset)) is not None:
                token = Terminal(DIGITS.token_type, digits.group(0), token_location)
                self._skip_n_chars(len(digits.group(0)))
            elif char in KEYWORDS:
                token = self._match_keyword(token_location)
            elif char == '"':
                token = self._match_string(token_location)
            else:
                raise UnrecognizedTokenError(char, token_location)
            yield token

    def _match_keyword(self, token_location: Loc) -> Terminal:
        keyword, kind = KEYWORDS[self._current_char()]
        if not self._code.startswith(keyword, self._code_offset):
            raise UnrecognizedTokenError(self._current_char(), token_location)
        self._skip_n_chars(len(keyword))
        return Terminal(kind.token_type, keyword, token_location)

    def _match_string(self, token_location: Loc) -> Terminal:
        self._to_next_char()  # opening quote
        chars: list[str] = []
        while not self._at_end():
            char = self._current_char()
            if char == '"':
                self._to_next_char()
                return Terminal(STRING_LITERAL.token_type, "".join(chars), token_location)
            if char == "\\":
                if self._code_offset + 1 >= len(self._code):
                    break
                self._to_next_char()
                escaped = self._current_char()
                if escaped not in ESCAPES:
                    raise StringLexFailure(
                        f"invalid escape sequence \\{escaped}", self._loc()
                    )
                chars.append(ESCAPES[escaped])
            else:
                chars.append(char)
            self._to_next_char()
        raise StringLexFailure("string is not properly closed", token_location)

    def get_tokens(self, code: str) -> list[Terminal]:
        """
        :return: every token of `code`, whitespace dropped
        """
        self._reset(code)
        return list(self._tokenize())
