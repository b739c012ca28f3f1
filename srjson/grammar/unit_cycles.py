# this module detects cycles of unit productions (A -> B, B -> A) in a grammar table.
# a stack cell labelled A would be relabelled forever by the reduce dispatcher.
from collections import defaultdict
from typing import TYPE_CHECKING, Iterable

from srjson.grammar.core import NonTerminal

if TYPE_CHECKING:
    from srjson.grammar.table import Production


def compute_unit_cycle_non_terminals(
    productions: Iterable["Production"],
) -> Iterable[NonTerminal]:
    """Compute the non-terminals that can be rewritten into themselves by unit reductions.
    :param productions: the productions of a grammar table
    :return: the non-terminals lying on a cycle of unit productions
    """

    # B can-become A whenever A -> B is an alternative
    becomes: dict[NonTerminal, set[NonTerminal]] = defaultdict(set)
    for production in productions:
        for lhs, expansion, _ in production:
            if expansion.is_unit():
                becomes[expansion[0]].add(lhs)

    # Calculate transitive closure of the relation 'B can-become A'
    #  Ex.: B->A, A->C => B->{A, C}
    changed = True
    while changed:
        changed = False
        for B in tuple(becomes.keys()):
            entries_copy = becomes[B].copy()
            for A in entries_copy:
                becomes[B].update(becomes[A])
            if entries_copy < becomes[B]:
                changed = True

    for B, entries in becomes.items():
        if B in entries:
            yield B


def has_unit_cycle(productions: Iterable["Production"]) -> bool:
    return any(compute_unit_cycle_non_terminals(productions))
