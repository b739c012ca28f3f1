"""
Semantic actions: one reducer per production of the JSON grammar.

Every reducer receives the matched stack cells, oldest first, and returns the node
carried by the cell that replaces them. Numbers are assembled from lexical
fragments (integer, fraction, exponent) and only decoded once the whole literal
has been reduced.
"""

from typing import Sequence, cast

from more_itertools import one

from srjson.errors import NumberDecodeError
from srjson.grammar.core import NULL_LITERAL, STRING_LITERAL
from srjson.sr.core import NonTerminalCell, StackCell, TerminalCell
from srjson.values import (
    Array,
    Bool,
    Fragment,
    Node,
    Null,
    Number,
    Object,
    String,
    ValueNode,
)


def _child(cell: StackCell) -> Node:
    assert isinstance(cell, NonTerminalCell), f"expected a reduced cell, got {cell!r}"
    return cell.value


def _lexeme(cell: StackCell) -> str:
    assert isinstance(cell, TerminalCell), f"expected a token, got {cell!r}"
    assert cell.token.lexeme is not None
    return cell.token.lexeme


def _fragment(cell: StackCell) -> str:
    fragment = _child(cell)
    if not isinstance(fragment, Fragment):
        raise NumberDecodeError(str(fragment))
    return fragment.text


def value_rule(cells: Sequence[StackCell]) -> Node:
    match one(cells):
        case NonTerminalCell(value=value):
            return value
        case TerminalCell(token=token) if token.matches(NULL_LITERAL):
            return Null()
        case TerminalCell(token=token) if token.matches(STRING_LITERAL):
            return String(_lexeme(one(cells)))
        case cell:
            raise AssertionError(f"value cannot be built from {cell!r}")


def boolean_rule(cells: Sequence[StackCell]) -> Node:
    return Bool(_lexeme(one(cells)) == "true")


def object_rule(cells: Sequence[StackCell]) -> Node:
    if len(cells) == 2:
        return Object()
    return _child(cells[1])


def members_rule(cells: Sequence[StackCell]) -> Node:
    member = cast(Object, _child(cells[-1]))
    if len(cells) == 3:
        return cast(Object, _child(cells[0])).extend(member)
    return member


def member_rule(cells: Sequence[StackCell]) -> Node:
    key, _, value = cells
    return Object(((_lexeme(key), cast(ValueNode, _child(value))),))


def array_rule(cells: Sequence[StackCell]) -> Node:
    if len(cells) == 2:
        return Array()
    return _child(cells[1])


def elements_rule(cells: Sequence[StackCell]) -> Node:
    element = cast(ValueNode, _child(cells[-1]))
    if len(cells) == 3:
        return cast(Array, _child(cells[0])).append(element)
    return Array((element,))


def element_rule(cells: Sequence[StackCell]) -> Node:
    return _child(one(cells))


def number_rule(cells: Sequence[StackCell]) -> Node:
    # integer [fraction] [exponent], already in source order
    text = "".join(_fragment(cell) for cell in cells)
    try:
        return Number(float(text))
    except ValueError:
        raise NumberDecodeError(text) from None


def integer_rule(cells: Sequence[StackCell]) -> Node:
    if len(cells) == 2:
        sign, digits = cells
        return Fragment(_lexeme(sign) + _lexeme(digits))
    return Fragment("+" + _lexeme(one(cells)))


def fraction_rule(cells: Sequence[StackCell]) -> Node:
    _, digits = cells
    return Fragment("." + _lexeme(digits))


def exponent_rule(cells: Sequence[StackCell]) -> Node:
    _, integer = cells
    return Fragment("e" + _fragment(integer))
