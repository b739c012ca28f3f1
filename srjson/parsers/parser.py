import logging
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import NamedTuple, Optional, cast

from more_itertools import one
from prettytable import PrettyTable
from rich import print as rich_print
from rich.text import Text
from rich.traceback import install

from srjson.errors import ParseError, ParsingError, UnexpectedToken
from srjson.grammar.core import Symbol, Terminal
from srjson.grammar.table import GrammarTable
from srjson.sr.core import (
    NonTerminalCell,
    PrefixMatch,
    StackCell,
    TerminalCell,
    stack_symbols,
)
from srjson.sr.decision import ShiftReduceDecider
from srjson.sr.dispatch import ReduceDispatcher
from srjson.tokenizer.tokenizer import Tokenizer
from srjson.utils.fixpoint import fixpoint
from srjson.values import ValueNode

install(show_locals=False)

logger = logging.getLogger(__name__)


class ParserState(Enum):
    SCANNING = auto()
    DRAINING = auto()
    DONE = auto()
    FAILED = auto()


class Step(NamedTuple):
    state: ParserState
    action: str
    lookahead: Optional[Terminal]
    stack: tuple[Symbol, ...]


class Parser(ABC):
    def __init__(self, grammar: GrammarTable, source: str, filename: str = "(void)"):
        self.grammar = grammar
        self.source = source
        self.tokens: list[Terminal] = Tokenizer(filename).get_tokens(source)

    @abstractmethod
    def parse(self) -> ValueNode:
        """Parse the list of tokens into a single value"""
        ...


class ShiftReduceParser(Parser):
    """
    Drives the tokens through the decision procedure and the reduce dispatcher.

    SCANNING:  while tokens remain, shift the lookahead when the grammar expects it
               and reduce when told to; the cursor only moves forward on a shift.
    DRAINING:  once the input is exhausted, reduce until nothing matches or the
               stack is a single cell labelled with the start symbol.
    """

    def __init__(
        self,
        grammar: GrammarTable,
        source: str,
        filename: str = "(void)",
        *,
        trace: bool = False,
    ):
        super().__init__(grammar, source, filename)
        self.decider = ShiftReduceDecider(grammar)
        self.dispatcher = ReduceDispatcher(grammar)
        self.stack: list[StackCell] = []
        self.state = ParserState.SCANNING
        self.trace = trace
        self.steps: list[Step] = []

    def parse(self) -> ValueNode:
        self.stack, self.steps = [], []
        try:
            self.state = ParserState.SCANNING
            self._scan()
            self.state = ParserState.DRAINING
            fixpoint(self._drain_step)()
            value = self._accept()
        except (ParseError, RuntimeError):
            # RuntimeError: the drain loop hit its iteration guard
            self.state = ParserState.FAILED
            raise
        self.state = ParserState.DONE
        return value

    def _scan(self) -> None:
        cursor, reduced_performed = 0, True
        while cursor < len(self.tokens):
            lookahead = self.tokens[cursor]
            verdict = self.decider.decide(self.stack, lookahead)
            match verdict:
                case PrefixMatch.FULL_MATCH | PrefixMatch.PARTIAL_MATCH:
                    self._shift(lookahead, verdict)
                    cursor += 1
                    if verdict is PrefixMatch.PARTIAL_MATCH:
                        continue
                case PrefixMatch.NO_MATCH if not reduced_performed:
                    self._record("error", lookahead)
                    raise UnexpectedToken(lookahead)
            # after a full match, or a mismatch that may go away once the stack is reduced;
            # in the latter case the same lookahead is decided again on the next turn
            reduced_performed = self._reduce(lookahead) > 0

    def _shift(self, token: Terminal, verdict: PrefixMatch) -> None:
        self.stack.append(TerminalCell(token))
        self._record("shift" if verdict is PrefixMatch.FULL_MATCH else "shift (defer)", token)

    def _reduce(self, lookahead: Optional[Terminal]) -> int:
        consumed = self.dispatcher.reduce(self.stack)
        self._record(f"reduce {consumed}" if consumed else "no reduction", lookahead)
        return consumed

    def _accepted(self) -> bool:
        return (
            len(self.stack) == 1
            and isinstance(self.stack[0], NonTerminalCell)
            and self.stack[0].label == self.grammar.start
        )

    def _drain_step(self) -> int:
        if self._accepted():
            return 0
        return self._reduce(None)

    def _accept(self) -> ValueNode:
        error = ParsingError(stack_symbols(self.stack))
        cell = one(self.stack, too_short=error, too_long=error)
        if not self._accepted():
            raise error
        self._record("accept", None)
        return cast(ValueNode, cast(NonTerminalCell, cell).value)

    def _record(self, action: str, lookahead: Optional[Terminal]) -> None:
        if not (self.trace or logger.isEnabledFor(logging.DEBUG)):
            return
        symbols = tuple(stack_symbols(self.stack))
        logger.debug(
            "%s: %s, lookahead %s, stack [%s]",
            self.state.name,
            action,
            lookahead if lookahead is not None else "<end>",
            " ".join(str(symbol) for symbol in symbols),
        )
        if self.trace:
            self.steps.append(Step(self.state, action, lookahead, symbols))

    def trace_table(self) -> PrettyTable:
        table = PrettyTable()
        table.field_names = ["Step", "State", "Action", "Lookahead", "Stack"]
        table.align = "l"
        for index, (state, action, lookahead, symbols) in enumerate(self.steps):
            table.add_row(
                [
                    index,
                    state.name,
                    action,
                    "" if lookahead is None else lookahead.lexeme,
                    " ".join(str(symbol) for symbol in symbols),
                ]
            )
        return table

    def print_trace(self) -> None:
        # no markup: "[" and "]" are grammar symbols here
        rich_print(Text(self.trace_table().get_string()))
