"""
JSON decoding driven by a grammar table.

Every step the parser rescans a declarative table of productions to decide whether
to shift the next token or to reduce the top of its stack; the reductions build
the resulting value.

    >>> from srjson import parse
    >>> parse('{"a": [1, true]}').to_python()
    {'a': [1.0, True]}
"""

from typing import Optional

from srjson.errors import (
    GrammarError,
    LexingError,
    NumberDecodeError,
    ParseError,
    ParsingError,
    StringLexFailure,
    UnexpectedToken,
    UnrecognizedTokenError,
)
from srjson.grammar.core import Loc, NonTerminal, Terminal
from srjson.grammar.json_grammar import json_grammar
from srjson.grammar.table import GrammarTable, Production
from srjson.parsers.parser import ParserState, ShiftReduceParser
from srjson.tokenizer.tokenizer import Tokenizer
from srjson.values import Array, Bool, Null, Number, Object, String, ValueNode

__all__ = [
    "Array",
    "Bool",
    "GrammarError",
    "GrammarTable",
    "LexingError",
    "Loc",
    "NonTerminal",
    "Null",
    "Number",
    "NumberDecodeError",
    "Object",
    "ParseError",
    "ParserState",
    "ParsingError",
    "Production",
    "ShiftReduceParser",
    "String",
    "StringLexFailure",
    "Terminal",
    "Tokenizer",
    "UnexpectedToken",
    "UnrecognizedTokenError",
    "ValueNode",
    "json_grammar",
    "parse",
    "tokenize",
]


def tokenize(source: str, filename: str = "(void)") -> list[Terminal]:
    return Tokenizer(filename).get_tokens(source)


def parse(
    source: str,
    *,
    filename: str = "(void)",
    grammar: Optional[GrammarTable] = None,
) -> ValueNode:
    """
    Parse one JSON document.

    :param source: the document
    :param filename: reported in error locations
    :param grammar: a table to parse with instead of the JSON grammar
    :return: the value of the document
    """
    if grammar is None:
        grammar = json_grammar()
    return ShiftReduceParser(grammar, source, filename).parse()
