from typing import Sequence

from srjson.grammar.core import DUMMY_LOC, Loc, Symbol, Terminal


class ParseError(SyntaxError):
    """Base class of every failure raised while turning text into a value."""


class LexingError(ParseError):
    def __init__(self, message: str, loc: Loc = DUMMY_LOC):
        self.loc = loc
        if loc is not DUMMY_LOC:
            message = f"At position {loc}, {message}"
        super().__init__(message)


class UnrecognizedTokenError(LexingError):
    def __init__(self, char: str, loc: Loc = DUMMY_LOC):
        self.char = char
        super().__init__(f'unrecognized token: "{char}"', loc)


class StringLexFailure(LexingError):
    def __init__(self, reason: str, loc: Loc = DUMMY_LOC):
        self.reason = reason
        super().__init__(reason, loc)

    @property
    def position(self) -> int:
        return self.loc.offset


class ParsingError(ParseError):
    """The stack did not collapse into exactly one value."""

    def __init__(self, stack_symbols: Sequence[Symbol]):
        self.stack_symbols: tuple[Symbol, ...] = tuple(stack_symbols)
        if self.stack_symbols:
            found = " ".join(str(symbol) for symbol in self.stack_symbols)
        else:
            found = "an empty stack"
        super().__init__(f"Could not reduce input to a single value, found {found}")


class UnexpectedToken(ParseError):
    def __init__(self, token: Terminal):
        self.token = token
        super().__init__(f"Unexpected {token.token_type} at {token.loc}")

    @property
    def kind(self) -> str:
        return self.token.token_type


class NumberDecodeError(ParseError, ValueError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"could not decode numeric literal {text!r}")


class GrammarError(ValueError):
    """Raised by the grammar builder when a table cannot drive the parser."""
