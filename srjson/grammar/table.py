from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, NamedTuple, Optional, Sequence

from more_itertools import first
from prettytable import PrettyTable

from srjson.errors import GrammarError
from srjson.grammar.core import Expansion, NonTerminal, Symbol, Terminal
from srjson.grammar.unit_cycles import compute_unit_cycle_non_terminals
from srjson.sr.core import StackCell
from srjson.values import Node

Reducer = Callable[[Sequence[StackCell]], Node]


class Alternative(NamedTuple):
    lhs: NonTerminal
    expansion: Expansion
    reducer: Reducer


@dataclass(frozen=True, slots=True)
class Production:
    lhs: NonTerminal
    alternatives: tuple[Expansion, ...]
    reducer: Reducer = field(compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "alternatives", tuple(Expansion(seq) for seq in self.alternatives)
        )

    def __iter__(self) -> Iterator[Alternative]:
        for expansion in self.alternatives:
            yield Alternative(self.lhs, expansion, self.reducer)

    def __str__(self):
        return f"{self.lhs!s} => " + " | ".join(str(e) for e in self.alternatives)

    def __repr__(self):
        return f"{self.lhs!r} => " + " | ".join(repr(e) for e in self.alternatives)


@dataclass(frozen=True, slots=True)
class GrammarTable:
    """
    An ordered, read-only sequence of productions.
    Construction fails with a GrammarError when the start symbol has no production
    or when unit productions form a cycle; the Builder adds its own checks on top.

    Declaration order matters: when two alternatives of the same length match the
    top of the stack, the one declared first is reduced.
    """

    productions: tuple[Production, ...]
    start: NonTerminal
    alternatives: tuple[Alternative, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.start not in {production.lhs for production in self.productions}:
            raise GrammarError(f"start symbol {self.start!s} has no production")
        # a unit cycle would let the dispatcher relabel the same cell forever
        if cycles := sorted(
            str(nt) for nt in compute_unit_cycle_non_terminals(self.productions)
        ):
            raise GrammarError(
                f"unit productions form a cycle through {', '.join(cycles)}"
            )
        object.__setattr__(
            self,
            "alternatives",
            tuple(
                alternative
                for production in self.productions
                for alternative in production
            ),
        )

    def iter_alternatives(self) -> Iterator[Alternative]:
        return iter(self.alternatives)

    def __iter__(self) -> Iterator[Production]:
        return iter(self.productions)

    def __len__(self) -> int:
        return len(self.productions)

    @property
    def non_terminals(self) -> frozenset[NonTerminal]:
        return frozenset(production.lhs for production in self.productions)

    @property
    def terminals(self) -> frozenset[Terminal]:
        return frozenset(
            symbol
            for _, expansion, _ in self.alternatives
            for symbol in expansion
            if isinstance(symbol, Terminal)
        )

    def to_pretty_table(self) -> PrettyTable:
        table = PrettyTable()
        table.field_names = ["Non Terminal", "Alternative", "Reducer"]
        table.align = "l"
        for lhs, expansion, reducer in self.alternatives:
            table.add_row([str(lhs), str(expansion), reducer.__name__])
        return table

    def __str__(self) -> str:
        return "\n".join(str(production) for production in self.productions)

    def __repr__(self) -> str:
        return "\n".join(repr(production) for production in self.productions)

    class Builder:
        __slots__ = ("_productions", "_start")

        def __init__(self, start: Optional[NonTerminal] = None) -> None:
            self._productions: list[Production] = []
            self._start = start

        def add_production(
            self,
            lhs: NonTerminal,
            alternatives: Iterable[Sequence[Symbol]],
            reducer: Reducer,
        ) -> "GrammarTable.Builder":
            if not isinstance(lhs, NonTerminal):
                raise GrammarError(f"left hand side {lhs!s} must be a non-terminal")
            if any(production.lhs == lhs for production in self._productions):
                raise GrammarError(
                    f"you are not allowed to overwrite the definition of {lhs!s}; "
                    f"list every alternative in a single production"
                )
            expansions = tuple(Expansion(seq) for seq in alternatives)
            if not expansions:
                raise GrammarError(f"{lhs!s} must have at least one alternative")
            if not all(expansions):
                raise GrammarError(
                    f"{lhs!s} has an empty alternative; "
                    f"empty alternatives cannot match a stack suffix"
                )
            self._productions.append(Production(lhs, expansions, reducer))
            return self

        def build(self) -> "GrammarTable":
            if not self._productions:
                raise GrammarError("grammar must have at least one rule")
            # the first declared production names the start symbol unless told otherwise
            start = self._start or first(self._productions).lhs
            return GrammarTable(tuple(self._productions), start)
