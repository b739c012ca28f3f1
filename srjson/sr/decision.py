from typing import Optional, Sequence

from srjson.grammar.core import Expansion, Symbol, Terminal
from srjson.grammar.table import GrammarTable
from srjson.sr.core import PrefixMatch, StackCell, same_symbols, stack_symbols

# how many stack cells are put in front of the lookahead
PROBE_DEPTH = 2


class ShiftReduceDecider:
    """
    Decides whether the lookahead should be shifted, by probing the grammar with the
    symbols of the top of the stack followed by the lookahead.

    No automaton is built; every call rescans the whole table.
    """

    def __init__(self, grammar: GrammarTable):
        self.grammar = grammar

    def probe(self, stack: Sequence[StackCell], lookahead: Terminal) -> list[Symbol]:
        return stack_symbols(stack[-PROBE_DEPTH:]) + [lookahead]

    def decide(self, stack: Sequence[StackCell], lookahead: Terminal) -> PrefixMatch:
        probe = self.probe(stack, lookahead)
        # longest suffix first, down to the lookahead alone
        for start in range(len(probe)):
            verdict = self.classify(probe[start:])
            if verdict is not PrefixMatch.NO_MATCH:
                return verdict
        return PrefixMatch.NO_MATCH

    def classify(self, candidates: Sequence[Symbol]) -> PrefixMatch:
        """
        Compare `candidates` with the prefix of every alternative.

        The longest alternative starting with `candidates` decides (the first
        declared one on ties): FULL_MATCH when it is exactly `candidates`,
        PARTIAL_MATCH when `candidates` is a proper prefix of it.
        """
        longest: Optional[Expansion] = None
        for _, expansion, _ in self.grammar.iter_alternatives():
            if len(candidates) > len(expansion):
                continue
            if not same_symbols(candidates, expansion[: len(candidates)]):
                continue
            if longest is None or len(expansion) > len(longest):
                longest = expansion

        if longest is None:
            return PrefixMatch.NO_MATCH
        if len(longest) == len(candidates):
            return PrefixMatch.FULL_MATCH
        return PrefixMatch.PARTIAL_MATCH
