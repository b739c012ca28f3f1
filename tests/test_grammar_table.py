from dataclasses import FrozenInstanceError

import pytest

from srjson import GrammarError, GrammarTable, json_grammar
from srjson.grammar.actions import element_rule, number_rule, value_rule
from srjson.grammar.core import (
    ARRAY,
    BOOL_LITERAL,
    DIGITS,
    ELEMENT,
    INTEGER,
    NUMBER,
    OBJECT,
    VALUE,
    Expansion,
    NonTerminal,
    Terminal,
)
from srjson.grammar.table import Production
from srjson.grammar.unit_cycles import compute_unit_cycle_non_terminals, has_unit_cycle

A = NonTerminal("A")
B = NonTerminal("B")
C = NonTerminal("C")
x = Terminal.kind("x")


def test_json_grammar_is_built_once():
    assert json_grammar() is json_grammar()


def test_json_grammar_shape():
    grammar = json_grammar()
    assert grammar.start == VALUE
    assert len(grammar) == 12
    assert len(grammar.alternatives) == 25
    assert [production.lhs.name for production in grammar] == [
        "value",
        "boolean",
        "object",
        "members",
        "member",
        "array",
        "elements",
        "element",
        "number",
        "integer",
        "fraction",
        "exponent",
    ]


def test_alternatives_keep_declaration_order():
    alternatives = list(json_grammar().iter_alternatives())
    assert alternatives[0].lhs == VALUE
    assert tuple(alternatives[0].expansion) == (OBJECT,)
    assert tuple(alternatives[1].expansion) == (ARRAY,)
    numbers = [tuple(alt.expansion) for alt in alternatives if alt.lhs == NUMBER]
    assert [len(expansion) for expansion in numbers] == [3, 2, 2, 1]


def test_terminals_and_non_terminals():
    grammar = json_grammar()
    assert {terminal.name for terminal in grammar.terminals} == {
        "{",
        "}",
        "[",
        "]",
        ",",
        ":",
        ".",
        "bool_literal",
        "exp",
        "digits",
        "null",
        "sign",
        "string",
    }
    assert len(grammar.non_terminals) == 12


def test_grammar_is_read_only():
    grammar = json_grammar()
    with pytest.raises(FrozenInstanceError):
        grammar.start = ELEMENT  # type: ignore


def test_pretty_table():
    table = json_grammar().to_pretty_table()
    assert table.field_names == ["Non Terminal", "Alternative", "Reducer"]
    assert len(table.rows) == 25
    assert ["number", "integer fraction exponent", "number_rule"] in table.rows


def test_str_lists_productions():
    assert "integer => digits | sign digits" in str(json_grammar())


def test_builder_defaults_start_to_first_production():
    grammar = (
        GrammarTable.Builder()
        .add_production(A, [[B]], value_rule)
        .add_production(B, [[x]], value_rule)
        .build()
    )
    assert grammar.start == A


@pytest.mark.parametrize(
    "builder",
    [
        lambda: GrammarTable.Builder(),
        lambda: GrammarTable.Builder(start=C).add_production(A, [[x]], value_rule),
        lambda: GrammarTable.Builder()
        .add_production(A, [[B], [x]], value_rule)
        .add_production(B, [[A]], value_rule),
        lambda: GrammarTable.Builder()
        .add_production(A, [[B]], value_rule)
        .add_production(B, [[C]], value_rule)
        .add_production(C, [[A], [x]], value_rule),
    ],
)
def test_build_rejects_unusable_grammars(builder):
    with pytest.raises(GrammarError):
        builder().build()


def test_add_production_rejects_bad_productions():
    builder = GrammarTable.Builder().add_production(A, [[x]], value_rule)
    with pytest.raises(GrammarError):
        builder.add_production(A, [[B]], value_rule)
    with pytest.raises(GrammarError):
        builder.add_production(B, [], value_rule)
    with pytest.raises(GrammarError):
        builder.add_production(B, [[x], []], value_rule)
    with pytest.raises(GrammarError):
        builder.add_production(x, [[B]], value_rule)  # type: ignore


def test_unit_cycles():
    cyclic = (
        Production(A, ((B,), (x,)), value_rule),
        Production(B, ((C,),), value_rule),
        Production(C, ((A,),), value_rule),
    )
    assert set(compute_unit_cycle_non_terminals(cyclic)) == {A, B, C}
    assert has_unit_cycle(cyclic)
    assert not has_unit_cycle(json_grammar())


def test_production_alternatives_become_expansions():
    production = Production(A, ((x,), [B, x]), value_rule)
    assert all(isinstance(expansion, Expansion) for expansion in production.alternatives)
    assert production.alternatives[0].is_unit() is False
    assert Production(A, ((B,),), value_rule).alternatives[0].is_unit()


def test_direct_construction_is_validated():
    grammar = GrammarTable((Production(A, ((x,),), value_rule),), A)
    assert not has_unit_cycle(grammar)
    with pytest.raises(GrammarError):
        GrammarTable(
            (
                Production(A, ((B,), (x,)), value_rule),
                Production(B, ((A,),), value_rule),
            ),
            A,
        )
    with pytest.raises(GrammarError):
        GrammarTable((Production(A, ((x,),), value_rule),), B)


def test_unit_chains_without_cycles_are_allowed():
    grammar = (
        GrammarTable.Builder(start=VALUE)
        .add_production(VALUE, [[NUMBER], [BOOL_LITERAL]], value_rule)
        .add_production(ELEMENT, [[VALUE]], element_rule)
        .add_production(NUMBER, [[INTEGER], [DIGITS]], number_rule)
        .build()
    )
    assert grammar.non_terminals == frozenset({VALUE, ELEMENT, NUMBER})
