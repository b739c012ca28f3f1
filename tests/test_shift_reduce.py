import pytest

from srjson import GrammarTable, json_grammar
from srjson.grammar.actions import value_rule
from srjson.grammar.core import (
    COMMA,
    DIGITS,
    DUMMY_LOC,
    ELEMENT,
    ELEMENTS,
    INTEGER,
    MEMBERS,
    NUMBER,
    OBJECT_START,
    SIGN,
    STRING_LITERAL,
    NonTerminal,
    Terminal,
)
from srjson.sr.core import (
    NonTerminalCell,
    PrefixMatch,
    TerminalCell,
    same_symbols,
    stack_symbols,
)
from srjson.sr.decision import ShiftReduceDecider
from srjson.sr.dispatch import ReduceDispatcher
from srjson.values import Array, Fragment, Number


def token(token_type: str, lexeme=None) -> Terminal:
    return Terminal(token_type, token_type if lexeme is None else lexeme, DUMMY_LOC)


def shifted(*tokens: Terminal) -> list:
    return [TerminalCell(t) for t in tokens]


def reduced(label: NonTerminal, value=None) -> NonTerminalCell:
    return NonTerminalCell(value if value is not None else Fragment(""), label)


@pytest.fixture
def decider():
    return ShiftReduceDecider(json_grammar())


@pytest.fixture
def dispatcher():
    return ReduceDispatcher(json_grammar())


def test_same_symbols():
    assert same_symbols([token("{"), MEMBERS], [OBJECT_START, MEMBERS])
    assert not same_symbols([token("{")], [OBJECT_START, MEMBERS])
    assert not same_symbols([SIGN, DIGITS], [DIGITS, SIGN])
    assert same_symbols([], [])


def test_probe_looks_at_two_cells():
    decider = ShiftReduceDecider(json_grammar())
    stack = shifted(token("["), token("digits", "1"), token(","))
    assert decider.probe(stack, token("digits", "2")) == [
        token("digits"),
        COMMA,
        DIGITS,
    ]
    assert decider.probe([], token(",")) == [COMMA]


@pytest.mark.parametrize(
    "stack, lookahead, expected",
    [
        ([], token("{"), PrefixMatch.PARTIAL_MATCH),
        (shifted(token("{")), token("}"), PrefixMatch.FULL_MATCH),
        ([], token("digits", "12"), PrefixMatch.FULL_MATCH),
        # `string : value` is longer than `value -> string`
        ([], token("string", "a"), PrefixMatch.PARTIAL_MATCH),
        ([], token(","), PrefixMatch.NO_MATCH),
        ([], token("}"), PrefixMatch.NO_MATCH),
        ([reduced(MEMBERS)], token(","), PrefixMatch.PARTIAL_MATCH),
        ([reduced(ELEMENTS)], token("]"), PrefixMatch.NO_MATCH),
        (shifted(token("[")) + [reduced(ELEMENTS)], token("]"), PrefixMatch.FULL_MATCH),
        ([reduced(INTEGER)], token("."), PrefixMatch.PARTIAL_MATCH),
        ([reduced(INTEGER)], token("exp", "e"), PrefixMatch.PARTIAL_MATCH),
        (shifted(token("sign", "-")), token("digits", "1"), PrefixMatch.FULL_MATCH),
        (
            shifted(token("{"), token("string", "a"), token(":")),
            token("}"),
            PrefixMatch.NO_MATCH,
        ),
    ],
)
def test_decide(decider, stack, lookahead, expected):
    assert decider.decide(stack, lookahead) is expected


@pytest.mark.parametrize(
    "candidates, expected",
    [
        ([INTEGER], PrefixMatch.PARTIAL_MATCH),
        ([INTEGER, NonTerminal("fraction"), NonTerminal("exponent")], PrefixMatch.FULL_MATCH),
        ([NUMBER], PrefixMatch.FULL_MATCH),
        ([ELEMENTS, COMMA], PrefixMatch.PARTIAL_MATCH),
        ([COMMA, ELEMENT], PrefixMatch.NO_MATCH),
        ([STRING_LITERAL], PrefixMatch.PARTIAL_MATCH),
    ],
)
def test_classify(decider, candidates, expected):
    assert decider.classify(candidates) is expected


def test_reduce_digits_into_integer(dispatcher):
    stack = shifted(token("digits", "7"))
    assert dispatcher.reduce(stack) == 1
    assert stack == [NonTerminalCell(Fragment("+7"), INTEGER)]


def test_reduce_prefers_the_longest_suffix(dispatcher):
    stack = shifted(token("sign", "-"), token("digits", "3"))
    assert dispatcher.reduce(stack) == 2
    assert stack == [NonTerminalCell(Fragment("-3"), INTEGER)]


def test_reduce_elements(dispatcher):
    first, second = Number(1.0), Number(2.0)
    stack = (
        shifted(token("["))
        + [NonTerminalCell(Array((first,)), ELEMENTS)]
        + shifted(token(","))
        + [NonTerminalCell(second, ELEMENT)]
    )
    assert dispatcher.reduce(stack) == 3
    assert stack_symbols(stack) == [token("["), ELEMENTS]
    assert stack[-1].value == Array((first, second))


def test_reduce_without_match_leaves_the_stack_alone(dispatcher):
    stack = shifted(token("["), token(","))
    assert dispatcher.best_match(stack) is None
    assert dispatcher.reduce(stack) == 0
    assert stack_symbols(stack) == [token("["), COMMA]


def test_reduce_on_empty_stack(dispatcher):
    assert dispatcher.reduce([]) == 0


def test_ties_go_to_the_first_declared_alternative():
    first, second = NonTerminal("first"), NonTerminal("second")
    x = Terminal.kind("x")
    grammar = (
        GrammarTable.Builder(start=first)
        .add_production(first, [[x]], value_rule)
        .add_production(second, [[x]], value_rule)
        .build()
    )
    stack = shifted(token("x", "null"))
    assert ReduceDispatcher(grammar).best_match(stack).lhs == first
