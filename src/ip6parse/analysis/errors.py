from enum import IntEnum


class ParseStatus(IntEnum):
    OK = 1
    TOO_LONG = -256
    OUT_OF_RANGE = -257
    UNEXPECTED_DOUBLE_COLON_STATE = -258
    TOO_MANY_COLONS = -259
    NOT_ENOUGH_DIGITS = -260
    TOO_MANY_HEX_DIGITS = -261
    OUT_OF_BOUNDS = -262
    TRAILING_COLON = -263
    GROUP_COUNT_MISMATCH = -264


# -1 is the first character of the input, -2 the second one, etc.
MAX_SYNTAX_POSITION = 255

DESCRIPTIONS = {
    ParseStatus.OK: "address parsed",
    ParseStatus.TOO_LONG: "input string is too long",
    ParseStatus.OUT_OF_RANGE: "too many hex digits or colons in input",
    ParseStatus.UNEXPECTED_DOUBLE_COLON_STATE: "'::' found in the middle of a group",
    ParseStatus.TOO_MANY_COLONS: "too many colons for '::' to expand",
    ParseStatus.NOT_ENOUGH_DIGITS: "no colons and not exactly 32 hex digits",
    ParseStatus.TOO_MANY_HEX_DIGITS: "more than four hex digits in a group",
    ParseStatus.OUT_OF_BOUNDS: "declared length out of bounds",
    ParseStatus.TRAILING_COLON: "trailing colon",
    ParseStatus.GROUP_COUNT_MISMATCH: "address does not have eight groups",
}


def syntax_error(position):
    # position is 1-based
    return -position


def is_syntax_error(code):
    return -MAX_SYNTAX_POSITION <= code <= -1


def error_position(code):
    if not is_syntax_error(code):
        return None
    return -code


def describe(code):
    if is_syntax_error(code):
        return f"syntax error at character {-code}"
    try:
        return DESCRIPTIONS[ParseStatus(code)]
    except ValueError:
        return f"unknown status {code}"


class IP6ParseError(ValueError):
    """Raised when a textual IPv6 address can not be converted."""

    def __init__(self, code, text=None):
        self.code = code
        self.text = text
        self.position = error_position(code)
        super().__init__(f"{describe(code)} ({code})")

    @property
    def status(self):
        if self.position is not None:
            return None
        return ParseStatus(self.code)


class IP6SyntaxError(IP6ParseError):
    """Invalid or misplaced character at ``position``."""

    @property
    def offending_char(self):
        if self.text is None or self.position > len(self.text):
            return None
        return self.text[self.position - 1]


def error_for(code, text=None):
    if is_syntax_error(code):
        return IP6SyntaxError(code, text)
    return IP6ParseError(code, text)
