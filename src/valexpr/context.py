"""Lexer context: runs the automaton and turns character runs into tokens."""

from __future__ import annotations

from valexpr.errors import EmptyBufferError
from valexpr.states import LexState, transition
from valexpr.tokens import CharClass, Character, Token, TokenKind, span_of

_OPERATOR_KINDS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    ",": TokenKind.COMMA,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

_CLASS_KINDS: dict[CharClass, TokenKind] = {
    CharClass.HASH: TokenKind.HEXVALUE,
    CharClass.NUMBER: TokenKind.NUMBER,
    CharClass.PERCENT: TokenKind.PERCENT,
    CharClass.LETTER: TokenKind.IDENTIFIER,
    CharClass.WHITESPACE: TokenKind.WHITESPACE,
    CharClass.END_OF_INPUT: TokenKind.ENDOFINPUT,
}


class Context:
    """Current lexer state plus the characters collected since the last token.

    A character that cannot start any token while in INITIAL is held in the
    buffer; a run of such characters becomes a single ERROR token.
    """

    def __init__(self, state: LexState = LexState.INITIAL, *, merge_operators: bool = True) -> None:
        self._state = state
        self._previous = state
        self._buffer: list[Character] = []
        self._merge_operators = merge_operators

    @property
    def state(self) -> LexState:
        return self._state

    @property
    def buffer(self) -> tuple[Character, ...]:
        return tuple(self._buffer)

    def transition_to(self, state: LexState) -> None:
        self._state = state

    def is_accepted(self) -> bool:
        return self._state.accepting

    def process_characters(self, char: Character) -> Character | None:
        """Advance the automaton by one character.

        Returns `char` when it begins a new run, which closes whatever was
        buffered before it. Returns None when `char` extends the current run,
        or when end of input arrives with nothing buffered.
        """
        previous = self._state
        self._previous = previous
        target = self._next(previous, char.kind)

        if previous is LexState.INITIAL:
            self.transition_to(target)
            if target is LexState.INITIAL:
                # Still unclassifiable: joins the pending run, if any
                return None if self._buffer else char
            return self._boundary(char)

        if target is LexState.INITIAL:
            # The run has ended; the character starts over from INITIAL
            self.transition_to(self._next(LexState.INITIAL, char.kind))
            return self._boundary(char)

        # Stay, or NUMBER -> PERCENT which extends the number
        self.transition_to(target)
        return None

    def process_tokens(self, char: Character) -> Token | None:
        """Feed one character and return the token it completed, if any."""
        boundary = self.process_characters(char)
        token = None
        if boundary is not None and self._buffer:
            token = self.create_token(self._buffer, self._previous)
            self._buffer = []
        if char.kind is not CharClass.END_OF_INPUT:
            self._buffer.append(char)
        return token

    def create_token(self, buffer: list[Character], state: LexState) -> Token:
        """Build the token for a run of characters accepted in `state`."""
        if not buffer:
            raise EmptyBufferError()
        value = "".join(ch.value for ch in buffer)
        return Token(value, Context.to_token_type(state.representative, value), span_of(buffer))

    @staticmethod
    def to_token_type(cls: CharClass, value: str) -> TokenKind:
        """Map a buffer's representative character class (and value) to a token kind."""
        if cls is CharClass.OPERATOR:
            return _OPERATOR_KINDS.get(value, TokenKind.OPERATOR)
        return _CLASS_KINDS.get(cls, TokenKind.ERROR)

    def _next(self, state: LexState, cls: CharClass) -> LexState:
        return transition(state, cls, merge_operators=self._merge_operators)

    def _boundary(self, char: Character) -> Character | None:
        if char.kind is CharClass.END_OF_INPUT and not self._buffer:
            return None
        return char
