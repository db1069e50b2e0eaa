"""Length-preserving scan state machine for neutralizing non-standard JSON tokens."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import replace
from enum import Enum
from typing import Final

from json_read_adapter._logger import get_logger

logger = get_logger(__name__)

type Position = int

# Out-of-band value fed once after the last byte; matches no transition
TERMINATOR: Final = -1

_QUOTE: Final = ord('"')
_BACKSLASH: Final = ord("\\")
_ZERO: Final = ord("0")
_NINE: Final = ord("9")
_SPACE: Final = ord(" ")
_FLOAT_MARKERS: Final = frozenset(b".Ee")

# 2**64 - 1; a digit run carries no sign, so this also covers the i64 range
_U64_MAX_DIGITS: Final = b"18446744073709551615"


class ScanMode(Enum):
    """Which kind of token the scanner is currently inside."""

    INITIAL = "initial"
    QUOTED = "quoted"
    QUOTED_ESCAPE = "quoted_escape"
    LITERAL = "literal"
    NUMBER = "number"


class Literal(Enum):
    """Bare identifiers that are rewritten once fully matched."""

    NAN = b"NaN"
    INFINITY = b"Infinity"


_LITERAL_STARTS: Final = {lit.value[0]: lit for lit in Literal}


@dataclass(frozen=True, slots=True)
class ScanState:
    """
    Scanner memory between two bytes.

    `progress` counts matched characters of `literal` while in LITERAL mode;
    `start` is the buffer offset where the current digit run began while in
    NUMBER mode.
    """

    mode: ScanMode
    literal: Literal | None = None
    progress: int = 0
    start: Position = 0


INITIAL: Final = ScanState(ScanMode.INITIAL)
_QUOTED: Final = ScanState(ScanMode.QUOTED)
_QUOTED_ESCAPE: Final = ScanState(ScanMode.QUOTED_ESCAPE)


def _is_digit(c: int) -> bool:
    return _ZERO <= c <= _NINE


def fits_64_bit(digits: bytes | bytearray | memoryview) -> bool:
    """
    Reports whether an unsigned run of ASCII digits parses as a 64-bit integer.

    Compares significant digits against the u64 maximum instead of calling
    int(), which refuses strings past sys.get_int_max_str_digits().
    """
    significant = bytes(digits).lstrip(b"0")
    if len(significant) != len(_U64_MAX_DIGITS):
        return len(significant) < len(_U64_MAX_DIGITS)
    return significant <= _U64_MAX_DIGITS


def _blank(buf: bytearray | memoryview, start: Position, end: Position) -> None:
    """Overwrites buf[start:end] with a zero followed by spaces."""
    buf[start] = _ZERO
    for j in range(start + 1, end):
        buf[j] = _SPACE


def _from_initial(i: Position, c: int) -> tuple[ScanState, int]:
    if c == _QUOTE:
        return _QUOTED, c
    literal = _LITERAL_STARTS.get(c)
    if literal is not None:
        return ScanState(ScanMode.LITERAL, literal, 1), c
    if c != TERMINATOR and _is_digit(c):
        return ScanState(ScanMode.NUMBER, start=i), c
    return INITIAL, c


def transition(
    buf: bytearray | memoryview, state: ScanState, i: Position, c: int
) -> tuple[ScanState, int]:
    """
    Advances the scanner by one byte.

    Returns the next state and the byte to store at offset `i`. Completing a
    NaN, Infinity or oversized integer also rewrites the token's earlier
    bytes in `buf`, never anything before the token's first byte.
    """
    mode = state.mode

    if mode is ScanMode.INITIAL:
        return _from_initial(i, c)

    if mode is ScanMode.QUOTED:
        if c == _BACKSLASH:
            return _QUOTED_ESCAPE, c
        if c == _QUOTE:
            return INITIAL, c
        return state, c

    if mode is ScanMode.QUOTED_ESCAPE:
        return _QUOTED, c

    if mode is ScanMode.LITERAL:
        if state.literal is None:
            raise ValueError("LITERAL scan state requires a literal")
        text = state.literal.value
        if c != text[state.progress]:
            # Broken prefix such as "Inferior": nothing was rewritten yet
            return _from_initial(i, c)
        if state.progress + 1 < len(text):
            return replace(state, progress=state.progress + 1), c
        start = i - len(text) + 1
        _blank(buf, start, i)
        logger.debug("Neutralized %s at offset %d", text.decode(), start)
        return INITIAL, _SPACE

    # ScanMode.NUMBER
    if c != TERMINATOR and _is_digit(c):
        return state, c
    if c in _FLOAT_MARKERS:
        return INITIAL, c
    if not fits_64_bit(buf[state.start : i]):
        _blank(buf, state.start, i)
        logger.debug(
            "Neutralized %d-digit integer at offset %d",
            i - state.start,
            state.start,
        )
    return _from_initial(i, c)


def translate_range(
    buf: bytearray | memoryview,
    state: ScanState,
    begin: Position,
    end: Position,
) -> ScanState:
    """Runs the scanner over buf[begin:end] in place and returns the final state."""
    for i in range(begin, end):
        state, buf[i] = transition(buf, state, i, buf[i])
    return state


def finish(buf: bytearray | memoryview, state: ScanState, end: Position) -> None:
    """Feeds the terminator at `end` so a trailing digit run gets decided."""
    transition(buf, state, end, TERMINATOR)


def pending_start(state: ScanState, end: Position) -> Position:
    """
    Returns the first offset before `end` whose final value is still unknown.

    Bytes from there on belong to an open literal prefix or digit run and may
    still be rewritten by a later byte.
    """
    if state.mode is ScanMode.LITERAL:
        return end - state.progress
    if state.mode is ScanMode.NUMBER:
        return state.start
    return end


def rebase(state: ScanState, shift: Position) -> ScanState:
    """Moves a digit run's start offset after `shift` bytes were dropped ahead of it."""
    if state.mode is ScanMode.NUMBER and shift:
        return replace(state, start=state.start - shift)
    return state
