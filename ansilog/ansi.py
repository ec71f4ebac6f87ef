"""Decode ANSI SGR color codes into styled text runs.

Only foreground colors are honoured. Every other escape sequence is consumed
and dropped, so control bytes never show up in the output text. Decoding a
line is pure: the only state is the per-call scan state.

A record may span several lines. A newline stays in the text of the run it
ends, and the color returns to the base color for the next line.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from ansilog.models import Color, StyledRun

ESC = "\x1b"

_FOREGROUND: dict[int, Color] = {
    30: Color.BLACK,
    31: Color.RED,
    32: Color.GREEN,
    33: Color.YELLOW,
    34: Color.BLUE,
    35: Color.MAGENTA,
    36: Color.CYAN,
    37: Color.WHITE,
    90: Color.BRIGHT_BLACK,
    91: Color.BRIGHT_RED,
    92: Color.BRIGHT_GREEN,
    93: Color.BRIGHT_YELLOW,
    94: Color.BRIGHT_BLUE,
    95: Color.BRIGHT_MAGENTA,
    96: Color.BRIGHT_CYAN,
    97: Color.BRIGHT_WHITE,
}

_RESET_CODES = {0, 39}
# 38 = extended foreground, 48 = extended background. Their sub-parameters
# must be skipped, or "38;5;31" would read as red.
_EXTENDED_CODES = {38, 48}
_MAX_CODE_DIGITS = 3


class _State(Enum):
    GROUND = "ground"
    ESCAPE = "escape"
    CSI = "csi"


def _is_param_digit(char: str) -> bool:
    return "0" <= char <= "9" or char == ";"


def _is_param_byte(char: str) -> bool:
    return "\x30" <= char <= "\x3f"


def _is_intermediate_byte(char: str) -> bool:
    return "\x20" <= char <= "\x2f"


def _is_final_byte(char: str) -> bool:
    return "\x40" <= char <= "\x7e"


def _is_escape_final_byte(char: str) -> bool:
    return "\x30" <= char <= "\x7e"


def _parse_code(token: str) -> int:
    if not token:
        return 0
    # No SGR code has more than three digits; longer ones are unknown.
    if len(token) > _MAX_CODE_DIGITS:
        return -1
    return int(token)


def _apply_sgr(raw_params: str, color: Color, base_color: Color) -> Color:
    tokens = raw_params.split(";")
    index = 0
    while index < len(tokens):
        code = _parse_code(tokens[index])
        index += 1

        if code in _RESET_CODES:
            color = base_color
        elif code in _FOREGROUND:
            color = _FOREGROUND[code]
        elif code in _EXTENDED_CODES and index < len(tokens):
            mode = tokens[index]
            if mode == "5":
                index += 2
            elif mode == "2":
                index += 4
            else:
                index += 1
    return color


def iter_runs(text: str, base_color: Color = Color.DEFAULT) -> Iterator[StyledRun]:
    state = _State.GROUND
    color = base_color
    pending: list[str] = []
    params: list[str] = []
    is_sgr = True

    index = 0
    length = len(text)
    while index < length:
        char = text[index]

        if state is _State.GROUND:
            if char == ESC:
                state = _State.ESCAPE
            elif char == "\n":
                pending.append(char)
                yield StyledRun("".join(pending), color)
                pending.clear()
                color = base_color
            else:
                pending.append(char)
            index += 1
            continue

        if state is _State.ESCAPE:
            if char == "[":
                state = _State.CSI
                params.clear()
                is_sgr = True
            elif char == ESC or _is_intermediate_byte(char):
                pass
            elif _is_escape_final_byte(char):
                # Final byte of a non-CSI escape such as "ESC ( B".
                state = _State.GROUND
            else:
                # Control and non-ASCII characters are re-read in ground state.
                state = _State.GROUND
                continue
            index += 1
            continue

        # CSI
        if _is_param_digit(char):
            params.append(char)
        elif _is_param_byte(char) or _is_intermediate_byte(char):
            is_sgr = False
        elif _is_final_byte(char):
            state = _State.GROUND
            if char == "m" and is_sgr:
                new_color = _apply_sgr("".join(params), color, base_color)
                if new_color is not color:
                    if pending:
                        yield StyledRun("".join(pending), color)
                        pending.clear()
                    color = new_color
        else:
            # Aborted sequence; the character starts over in ground state.
            state = _State.GROUND
            continue
        index += 1

    if pending:
        yield StyledRun("".join(pending), color)


def decode(text: str, base_color: Color = Color.DEFAULT) -> list[StyledRun]:
    return list(iter_runs(text, base_color))


def strip_ansi(text: str) -> str:
    return "".join(run.text for run in iter_runs(text))
