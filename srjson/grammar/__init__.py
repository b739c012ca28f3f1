from .core import (
    DUMMY_LOC,
    Expansion,
    Loc,
    NonTerminal,
    Symbol,
    Terminal,
)
