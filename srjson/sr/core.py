from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

from typeguard import typechecked

from srjson.grammar.core import NonTerminal, Symbol, Terminal
from srjson.values import Node


class PrefixMatch(Enum):
    """
    The verdict of the decision procedure for the current lookahead.

    NO_MATCH:       nothing in the grammar starts with the probe
    PARTIAL_MATCH:  the probe is a proper prefix of an alternative; shift, reduce later
    FULL_MATCH:     the probe is a complete alternative; shift, then reduce
    """

    NO_MATCH = 0
    PARTIAL_MATCH = 1
    FULL_MATCH = 2


@dataclass(frozen=True, slots=True)
class TerminalCell:
    token: Terminal

    @property
    def symbol(self) -> Symbol:
        return self.token

    def __repr__(self):
        return repr(self.token)


@dataclass(frozen=True, slots=True)
class NonTerminalCell:
    value: Node
    label: NonTerminal

    @property
    def symbol(self) -> Symbol:
        return self.label

    def __repr__(self):
        return repr(self.label)


StackCell = Union[TerminalCell, NonTerminalCell]


def stack_symbols(cells: Sequence[StackCell]) -> list[Symbol]:
    return [cell.symbol for cell in cells]


@typechecked
def same_symbols(query: Sequence[Symbol], target: Sequence[Symbol]) -> bool:
    """True iff both sequences have the same length and agree symbol by symbol.

    Slice either side to get an exact-match or a prefix test.
    """
    if len(query) != len(target):
        return False
    return all(left == right for left, right in zip(query, target))
