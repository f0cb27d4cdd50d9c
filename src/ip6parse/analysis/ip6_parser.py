"""Convert a human readable IPv6 address into its 16-byte binary form.

Accepted input, besides the usual colon notation:

    ::1
    2001:0db8:1234:5678::5
    2001:db8:1234:5678::5
    2001:DB8:1234:5678::5
    2001-0db8-1234-5678 0000-0000-0000-0005
    2001_db812345678__00__00__00__05

A single colon separates 16-bit groups of up to four hex digits, and one
double colon stands for a run of zero groups. Dashes and spaces are ignored.
Without any colon the address must be written as exactly 32 hex digits, and
an underscore may then be used for a zero digit.
"""
from ip6parse.analysis.errors import ParseStatus, error_for, syntax_error

NULL_TERMINATED = -1
MIN_DECLARED_LENGTH = 2
MAX_DECLARED_LENGTH = 75
SCAN_CAP = 100

ADDRESS_SIZE = 16
GROUPS = 8
GROUP_DIGITS = 4
COMPACT_DIGITS = 32

COLON = ':'
ZERO_DIGIT = '_'
SEPARATORS = ('-', ' ')


class _ScanResult:

    def __init__(self, marker=None, after_marker=1, colons=0):
        # index of the second colon of "::"
        self.marker = marker
        # groups written after "::", the segment up to the end counts as one
        self.after_marker = after_marker
        self.colons = colons


class _GroupState:

    def __init__(self):
        self.accumulator = 0
        self.digits = 0
        # a four digit group was written and no colon has closed it yet
        self.closed = False
        # a colon ended a short group, write it on the next flush check
        self.forced = False
        self.cursor = 0
        self.group = 0
        self.hex_count = 0


class IPv6Parser:

    HEX_VALUES = {char: int(char, 16) for char in "0123456789abcdefABCDEF"}

    def parse(self, text, length=NULL_TERMINATED, out=None):
        """Parse ``text`` into ``out`` (a fresh 16-byte bytearray by default).

        ``length`` is either NULL_TERMINATED or the number of characters to
        read, between 2 and 75. Returns ``(out, status)`` where status is
        ParseStatus.OK on success, -N for a syntax error at character N, or
        one of the negative ParseStatus codes.
        """
        out = self._output_buffer(out)

        if length != NULL_TERMINATED and not (
            MIN_DECLARED_LENGTH <= length <= MAX_DECLARED_LENGTH
        ):
            return out, ParseStatus.OUT_OF_BOUNDS

        chars = self._characters(text, length)

        scan = self.scan(chars)
        if not isinstance(scan, _ScanResult):
            return out, scan

        return out, self.convert(chars, scan, out)

    def to_bin(self, text, length=NULL_TERMINATED):
        out, status = self.parse(text, length)
        if status != ParseStatus.OK:
            raise error_for(status, self._characters(text, NULL_TERMINATED))
        return bytes(out)

    def is_valid(self, text, length=NULL_TERMINATED):
        return self.parse(text, length)[1] == ParseStatus.OK

    def scan(self, chars):
        """First pass: find "::", count the colons and the groups after it."""
        result = _ScanResult()
        last = None
        scanned = 0

        for index, char in enumerate(chars[:SCAN_CAP]):
            if last == COLON and char == COLON:
                if result.marker is not None:
                    return syntax_error(index + 1)
                result.marker = index
            if last != COLON and char == COLON and result.marker is not None:
                result.after_marker += 1
            if char == COLON:
                result.colons += 1
            last = char
            scanned = index + 1

        # 2001:db8::1:2000: is never caught by the second pass
        if last == COLON and result.marker != scanned - 1:
            return ParseStatus.TRAILING_COLON

        if len(chars) >= SCAN_CAP:
            return ParseStatus.TOO_LONG

        return result

    def convert(self, chars, scan, out):
        """Second pass: write each group of hex digits into ``out``."""
        out[:] = bytes(ADDRESS_SIZE)
        state = _GroupState()
        end = len(chars)

        for index, char in enumerate(chars):
            value = self.digit_value(char, scan.colons)
            if value is None and char != COLON and char not in SEPARATORS:
                return syntax_error(index + 1)

            if value is not None:
                if state.closed:
                    if scan.colons:
                        return ParseStatus.TOO_MANY_HEX_DIGITS
                    # compact form, the next group starts right away
                    state.closed = False
                state.accumulator = ((state.accumulator << 4) + value) & 0xFFFF
                state.digits += 1
                state.hex_count += 1

            if char == COLON and index != scan.marker:
                if state.closed:
                    state.closed = False
                elif state.digits:
                    state.forced = True

            if char == COLON and index == scan.marker:
                status = self._expand_elision(state, scan)
                if status is not None:
                    return status

            completed = value is not None and state.digits == GROUP_DIGITS
            if completed or state.forced or index + 1 >= end:
                if state.cursor + 1 >= ADDRESS_SIZE:
                    return ParseStatus.OUT_OF_RANGE
                self._flush(state, out)
                if completed:
                    state.closed = True

        # scan() already rejects text this long
        if end >= SCAN_CAP:
            return ParseStatus.TOO_LONG
        if scan.colons == 0 and state.hex_count != COMPACT_DIGITS:
            return ParseStatus.NOT_ENOUGH_DIGITS
        if scan.colons != 0 and state.group != GROUPS:
            return ParseStatus.GROUP_COUNT_MISMATCH

        return ParseStatus.OK

    def digit_value(self, char, colons):
        if char == ZERO_DIGIT and colons == 0:
            return 0
        return self.HEX_VALUES.get(char)

    def _expand_elision(self, state, scan):
        # the colon before the marker always closes or flushes the group
        if state.accumulator or state.digits or state.closed:
            return ParseStatus.UNEXPECTED_DOUBLE_COLON_STATE
        if state.group + scan.after_marker >= GROUPS:
            return ParseStatus.TOO_MANY_COLONS
        destination = GROUPS - scan.after_marker
        if destination < 0:
            return ParseStatus.TOO_MANY_COLONS
        state.cursor = destination * 2
        state.group = destination
        return None

    def _flush(self, state, out):
        out[state.cursor] = state.accumulator >> 8
        out[state.cursor + 1] = state.accumulator & 0xFF
        state.cursor += 2
        state.accumulator = 0
        state.digits = 0
        state.forced = False
        state.group += 1

    def _characters(self, text, length):
        if isinstance(text, (bytes, bytearray)):
            # one character per byte keeps error positions exact
            text = bytes(text).decode('latin-1')
        elif not isinstance(text, str):
            raise TypeError(f"expected str or bytes, got {type(text).__name__}")

        if length == NULL_TERMINATED:
            terminator = text.find('\0')
            return text if terminator == -1 else text[:terminator]
        return text[:length]

    def _output_buffer(self, out):
        if out is None:
            return bytearray(ADDRESS_SIZE)
        if len(out) != ADDRESS_SIZE:
            raise ValueError(f"output buffer must be {ADDRESS_SIZE} bytes, got {len(out)}")
        return out


_parser = IPv6Parser()


def ip6_parse(text, length=NULL_TERMINATED, out=None):
    return _parser.parse(text, length, out)


def ip6_to_bin(text, length=NULL_TERMINATED):
    return _parser.to_bin(text, length)
