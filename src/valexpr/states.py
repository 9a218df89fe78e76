"""Lexer states and the transition table of the tokenizing automaton."""

from __future__ import annotations

from enum import Enum

from valexpr.tokens import CharClass


class LexState(Enum):
    INITIAL = "Initial"
    WHITESPACE = "Whitespace"
    HEX = "Hex"
    LETTER = "Letter"
    NUMBER = "Number"
    PERCENT = "Percent"
    OPERATOR = "Operator"
    END = "End"

    @property
    def accepting(self) -> bool:
        return self is not LexState.INITIAL

    @property
    def representative(self) -> CharClass:
        """Character class that stands for a buffer accepted in this state."""
        return _REPRESENTATIVE[self]


_REPRESENTATIVE: dict[LexState, CharClass] = {
    LexState.INITIAL: CharClass.OTHER,
    LexState.WHITESPACE: CharClass.WHITESPACE,
    LexState.HEX: CharClass.HASH,
    LexState.LETTER: CharClass.LETTER,
    LexState.NUMBER: CharClass.NUMBER,
    LexState.PERCENT: CharClass.PERCENT,
    LexState.OPERATOR: CharClass.OPERATOR,
    LexState.END: CharClass.END_OF_INPUT,
}

# Classes that keep a state where it is. PERCENT and INITIAL never stay.
_STAY: dict[LexState, frozenset[CharClass]] = {
    LexState.WHITESPACE: frozenset({CharClass.WHITESPACE}),
    LexState.HEX: frozenset({CharClass.HASH, CharClass.LETTER, CharClass.NUMBER}),
    LexState.LETTER: frozenset({CharClass.LETTER, CharClass.NUMBER}),
    LexState.NUMBER: frozenset({CharClass.NUMBER}),
    LexState.PERCENT: frozenset(),
    LexState.OPERATOR: frozenset({CharClass.OPERATOR}),
    LexState.END: frozenset({CharClass.END_OF_INPUT}),
}

_FROM_INITIAL: dict[CharClass, LexState] = {
    CharClass.WHITESPACE: LexState.WHITESPACE,
    CharClass.HASH: LexState.HEX,
    CharClass.LETTER: LexState.LETTER,
    CharClass.NUMBER: LexState.NUMBER,
    CharClass.OPERATOR: LexState.OPERATOR,
    CharClass.END_OF_INPUT: LexState.END,
}


def transition(state: LexState, cls: CharClass, *, merge_operators: bool = True) -> LexState:
    """Return the state reached from `state` on a character of class `cls`."""
    if state is LexState.INITIAL:
        return _FROM_INITIAL.get(cls, LexState.INITIAL)
    if state is LexState.NUMBER and cls is CharClass.PERCENT:
        return LexState.PERCENT
    if state is LexState.OPERATOR and not merge_operators:
        return LexState.INITIAL
    if cls in _STAY[state]:
        return state
    return LexState.INITIAL
