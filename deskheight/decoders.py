"""Byte-stream decoders for the height reports of standing desk controllers."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod


def _check_byte(b: int) -> int:
    if not 0 <= b <= 0xFF:
        raise ValueError(f"byte out of range: {b!r}")
    return b


class Decoder(ABC):
    """Incremental decoder that is fed the controller's serial stream one byte at a time."""

    @abstractmethod
    def put(self, b: int) -> bool:
        """Feed one byte; return True once a complete height report has arrived."""

    @abstractmethod
    def decode(self) -> float:
        """Return the height carried by the most recent complete report."""


JARVIS_ADDR = 0xF2
_JARVIS_MAX_ARGS = 5
_CMD_NONE = 0x00
_CMD_HEIGHT = 0x01

# Parser positions.  The argument bytes occupy the positions between
# _J_LENGTH + 1 and _J_ARGS; a frame with n arguments starts at _J_CHKSUM - n.
_J_SYNC = 0
_J_SYNC2 = 1
_J_CMD = 2
_J_LENGTH = 3
_J_ARGS = _J_LENGTH + _JARVIS_MAX_ARGS
_J_CHKSUM = _J_ARGS + 1
_J_ENDMSG = _J_CHKSUM + 1


class JarvisDecoder(Decoder):
    """Decoder for the framed, checksummed protocol of Jarvis desk controllers."""

    def __init__(self) -> None:
        self._state = _J_SYNC
        self._cmd = _CMD_NONE
        self._checksum = 99
        self._argc = 0
        self._argv = [0] * _JARVIS_MAX_ARGS

    def _reset(self, ch: int) -> None:
        self._state = _J_SYNC2 if ch == JARVIS_ADDR else _J_SYNC
        self._cmd = _CMD_NONE
        self._argc = 0
        self._argv = [0] * _JARVIS_MAX_ARGS

    def put(self, b: int) -> bool:
        b = _check_byte(b)
        state = self._state
        complete = False

        if state in (_J_SYNC, _J_SYNC2):
            if b != JARVIS_ADDR:
                self._reset(b)
                return False
        elif state == _J_CMD:
            self._cmd = self._checksum = b
        elif state == _J_LENGTH:
            if b > _JARVIS_MAX_ARGS:
                self._reset(b)
                return False
            self._argc = b
            self._checksum = (self._checksum + b) & 0xFF
            state = _J_CHKSUM - b - 1
        elif state == _J_CHKSUM:
            if b != self._checksum:
                self._reset(b)
                return False
            complete = True
        elif state == _J_ENDMSG:
            self._reset(b)
            return False
        else:
            self._argv[self._argc - (_J_CHKSUM - state)] = b
            self._checksum = (self._checksum + b) & 0xFF

        self._state = state + 1
        return complete and self._cmd == _CMD_HEIGHT

    def decode(self) -> float:
        if self._cmd != _CMD_HEIGHT:
            return 0.0
        return ((self._argv[0] << 8) | self._argv[1]) / 10.0


class _UpliftState(enum.Enum):
    SYNC1 = enum.auto()
    SYNC2 = enum.auto()
    HEIGHT1 = enum.auto()
    HEIGHT2 = enum.auto()


class UpliftDecoder(Decoder):
    """Decoder for Uplift controllers: 0x01 0x01 followed by a big-endian height."""

    def __init__(self) -> None:
        self._state = _UpliftState.SYNC1
        self._buf = [0, 0]

    def put(self, b: int) -> bool:
        b = _check_byte(b)
        state = self._state
        if state is _UpliftState.SYNC1:
            self._state = _UpliftState.SYNC2 if b == 0x01 else _UpliftState.SYNC1
            return False
        if state is _UpliftState.SYNC2:
            self._state = _UpliftState.HEIGHT1 if b == 0x01 else _UpliftState.SYNC1
            return False
        if state is _UpliftState.HEIGHT1:
            if b in (0x00, 0x01):
                self._buf[0] = b
                self._state = _UpliftState.HEIGHT2
            else:
                self._state = _UpliftState.SYNC1
            return False
        self._buf[1] = b
        self._state = _UpliftState.SYNC1
        return True

    def decode(self) -> float:
        return ((self._buf[0] << 8) | self._buf[1]) / 10.0


class OmnideskDecoder(UpliftDecoder):
    """Uplift framing that also accepts high bytes 0x02 to 0x04."""

    def put(self, b: int) -> bool:
        b = _check_byte(b)
        if self._state is _UpliftState.HEIGHT1 and b in (0x02, 0x03, 0x04):
            self._buf[0] = b
            self._state = _UpliftState.HEIGHT2
            return False
        return super().put(b)


_SEVEN_SEGMENT_DIGITS = {
    0b00111111: 0,
    0b00000110: 1,
    0b01011011: 2,
    0b01001111: 3,
    0b01100110: 4,
    0b01101101: 5,
    0b01111101: 6,
    0b00000111: 7,
    0b01111111: 8,
    0b01101111: 9,
}

_DOT_BIT = 0b10000000


def decode_7seg(b: int) -> int:
    """Return the digit shown by a seven-segment pattern, or -1; the dot bit is ignored."""
    return _SEVEN_SEGMENT_DIGITS.get(b & 0b01111111, -1)


class _PokarState(enum.Enum):
    START = enum.auto()
    HEIGHT1 = enum.auto()
    HEIGHT2 = enum.auto()
    HEIGHT3 = enum.auto()
    AFTER_HEIGHT = enum.auto()
    CHECKSUM = enum.auto()


class PokarDecoder(Decoder):
    """Decoder for Pokar controllers, which send raw seven-segment display data."""

    def __init__(self) -> None:
        self._state = _PokarState.START
        self._buf = [0, 0, 0, 0]

    def put(self, b: int) -> bool:
        b = _check_byte(b)
        state = self._state
        if state is _PokarState.START:
            if b == 0x5A:
                self._state = _PokarState.HEIGHT1
            return False
        if state is _PokarState.HEIGHT1:
            self._buf[0] = b
            self._state = _PokarState.HEIGHT2
            return False
        if state is _PokarState.HEIGHT2:
            self._buf[1] = b
            self._state = _PokarState.HEIGHT3
            return False
        if state is _PokarState.HEIGHT3:
            self._buf[2] = b
            self._state = _PokarState.AFTER_HEIGHT
            return False
        if state is _PokarState.AFTER_HEIGHT:
            self._state = _PokarState.CHECKSUM if b == 0x01 else _PokarState.START
            return False
        self._buf[3] = b
        self._state = _PokarState.START
        return True

    def decode(self) -> float:
        # The checksum byte is not verified.
        hundreds, tens, ones = self._buf[:3]
        total = float(
            decode_7seg(hundreds) * 100 + decode_7seg(tens) * 10 + decode_7seg(ones)
        )
        if tens & _DOT_BIT:
            total /= 10
        return total