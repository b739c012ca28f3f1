from functools import cache

from srjson.grammar.actions import (
    array_rule,
    boolean_rule,
    element_rule,
    elements_rule,
    exponent_rule,
    fraction_rule,
    integer_rule,
    member_rule,
    members_rule,
    number_rule,
    object_rule,
    value_rule,
)
from srjson.grammar.core import (
    ARRAY,
    ARRAY_END,
    ARRAY_START,
    BOOL_LITERAL,
    BOOLEAN,
    COLON,
    COMMA,
    DIGITS,
    ELEMENT,
    ELEMENTS,
    EXP_MARKER,
    EXPONENT,
    FRACTION,
    FRACTION_SYMBOL,
    INTEGER,
    MEMBER,
    MEMBERS,
    NULL_LITERAL,
    NUMBER,
    OBJECT,
    OBJECT_END,
    OBJECT_START,
    SIGN,
    STRING_LITERAL,
    VALUE,
)
from srjson.grammar.table import GrammarTable


@cache
def json_grammar() -> GrammarTable:
    """The JSON grammar; built on first use and shared by every parse afterwards."""
    return (
        GrammarTable.Builder(start=VALUE)
        .add_production(
            VALUE,
            [
                [OBJECT],
                [ARRAY],
                [NUMBER],
                [BOOLEAN],
                [STRING_LITERAL],
                [NULL_LITERAL],
            ],
            value_rule,
        )
        .add_production(BOOLEAN, [[BOOL_LITERAL]], boolean_rule)
        .add_production(
            OBJECT,
            [
                [OBJECT_START, OBJECT_END],
                [OBJECT_START, MEMBERS, OBJECT_END],
            ],
            object_rule,
        )
        .add_production(
            MEMBERS,
            [
                [MEMBER],
                [MEMBERS, COMMA, MEMBER],
            ],
            members_rule,
        )
        .add_production(MEMBER, [[STRING_LITERAL, COLON, VALUE]], member_rule)
        .add_production(
            ARRAY,
            [
                [ARRAY_START, ARRAY_END],
                [ARRAY_START, ELEMENTS, ARRAY_END],
            ],
            array_rule,
        )
        .add_production(
            ELEMENTS,
            [
                [ELEMENT],
                [ELEMENTS, COMMA, ELEMENT],
            ],
            elements_rule,
        )
        .add_production(ELEMENT, [[VALUE]], element_rule)
        .add_production(
            NUMBER,
            [
                [INTEGER, FRACTION, EXPONENT],
                [INTEGER, FRACTION],
                [INTEGER, EXPONENT],
                [INTEGER],
            ],
            number_rule,
        )
        .add_production(
            INTEGER,
            [
                [DIGITS],
                [SIGN, DIGITS],
            ],
            integer_rule,
        )
        .add_production(FRACTION, [[FRACTION_SYMBOL, DIGITS]], fraction_rule)
        .add_production(EXPONENT, [[EXP_MARKER, INTEGER]], exponent_rule)
        .build()
    )
