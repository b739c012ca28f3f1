import logging
from typing import Optional

from srjson.grammar.table import Alternative, GrammarTable
from srjson.sr.core import NonTerminalCell, StackCell, same_symbols, stack_symbols

logger = logging.getLogger(__name__)


class ReduceDispatcher:
    def __init__(self, grammar: GrammarTable):
        self.grammar = grammar

    def best_match(self, stack: list[StackCell]) -> Optional[Alternative]:
        """
        The longest alternative equal to a suffix of the stack.
        Ties go to the alternative declared first; ambiguity is not detected.
        """
        best: Optional[Alternative] = None
        for alternative in self.grammar.iter_alternatives():
            size = len(alternative.expansion)
            if size > len(stack):
                continue
            if best is not None and size <= len(best.expansion):
                continue
            if same_symbols(stack_symbols(stack[-size:]), alternative.expansion):
                best = alternative
        return best

    def reduce(self, stack: list[StackCell]) -> int:
        """
        Replace the best matching suffix of `stack` with one reduced cell, in place.

        :return: the number of cells consumed, 0 if nothing matched
        """
        if (best := self.best_match(stack)) is None:
            return 0

        lhs, expansion, reducer = best
        size = len(expansion)
        value = reducer(stack[-size:])
        del stack[-size:]
        stack.append(NonTerminalCell(value, lhs))
        logger.debug("reduced %s => %s", expansion, lhs)
        return size
