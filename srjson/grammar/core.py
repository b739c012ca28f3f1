from abc import ABC
from typing import Iterable, NamedTuple, Optional


class Symbol(ABC):
    """A symbol in a grammar;
    Each is identified by a unique name"""

    def __init__(self, name: str) -> None:
        self.name = name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self):
        return self.name

    def __eq__(self, other):
        if not isinstance(other, Symbol):
            return NotImplemented
        return self.name == other.name


class Loc(NamedTuple):
    filename: str
    line: int
    col: int
    offset: int

    def __str__(self):
        return f"<{self.filename}:{self.line}:{self.col}>"


DUMMY_LOC = Loc("", -1, -1, -1)


class Terminal(Symbol):
    """
    A token has three components:
    1) Its type
    2) A lexeme -- the decoded payload of the source text it represents
    3) The location in code of the lexeme

    Terminals declared in a grammar are tokens without a payload or location.
    """

    def __init__(self, token_type: str, lexeme: Optional[str], loc: Loc):
        super().__init__(token_type)
        self.token_type = token_type
        self.lexeme = lexeme
        self.loc = loc

    @staticmethod
    def kind(token_type: str) -> "Terminal":
        return Terminal(token_type, None, DUMMY_LOC)

    def matches(self, token: "Terminal") -> bool:
        if isinstance(token, Terminal):
            return self.token_type == token.token_type
        return False

    def __repr__(self):
        return f"[bold blue]{self.name}[/bold blue]"


class NonTerminal(Symbol):
    def __repr__(self):
        return f"[bold red]<{self.name}>[/bold red]"


class Expansion(tuple[Symbol, ...]):
    """One right-hand-side alternative of a production."""

    def __new__(cls, args: Optional[Iterable[Symbol]] = None) -> "Expansion":
        if args is None:
            args = []
        return tuple.__new__(Expansion, args)  # type: ignore

    def is_unit(self) -> bool:
        return len(self) == 1 and isinstance(self[0], NonTerminal)

    def __str__(self):
        return " ".join(str(item) for item in self)

    def __repr__(self):
        return " ".join(repr(item) for item in self)


# terminal kinds
OBJECT_START = Terminal.kind("{")
OBJECT_END = Terminal.kind("}")
ARRAY_START = Terminal.kind("[")
ARRAY_END = Terminal.kind("]")
COMMA = Terminal.kind(",")
COLON = Terminal.kind(":")
FRACTION_SYMBOL = Terminal.kind(".")
BOOL_LITERAL = Terminal.kind("bool_literal")
EXP_MARKER = Terminal.kind("exp")
DIGITS = Terminal.kind("digits")
NULL_LITERAL = Terminal.kind("null")
SIGN = Terminal.kind("sign")
STRING_LITERAL = Terminal.kind("string")

# non-terminal kinds
VALUE = NonTerminal("value")
OBJECT = NonTerminal("object")
ARRAY = NonTerminal("array")
MEMBERS = NonTerminal("members")
MEMBER = NonTerminal("member")
ELEMENTS = NonTerminal("elements")
ELEMENT = NonTerminal("element")
BOOLEAN = NonTerminal("boolean")
NUMBER = NonTerminal("number")
INTEGER = NonTerminal("integer")
FRACTION = NonTerminal("fraction")
EXPONENT = NonTerminal("exponent")
