"""ISO-8601 duration strings.

Accepted grammar::

    [+|-]P[nY][nM][nW][nD][T[nH][nM][nS]]

Each ``n`` is a run of ASCII digits. Designators are optional, appear at most
once and only in the order shown. Fractional values are not supported.
"""

_DIGITS = frozenset("0123456789")

# Designators for each section, with the offset of the section's first value
# in the parsed tuple (years, months, weeks, days, hours, minutes, seconds)
_DATE_SECTION = ("YMWD", 0)
_TIME_SECTION = ("HMS", 4)


def _scan_section(
    text: str, pos: int, section: tuple[str, int], values: list[int]
) -> int | None:
    """Consume ``<n><designator>`` pairs starting at ``pos``.

    Returns the position after the last pair, or None if a number is not
    followed by a designator that may still appear in this section.
    """
    designators, offset = section
    state = 0
    while pos < len(text) and text[pos] in _DIGITS:
        end = pos
        while end < len(text) and text[end] in _DIGITS:
            end += 1
        if end == len(text):
            return None
        slot = designators.find(text[end], state)
        if slot < 0:
            return None
        values[offset + slot] = int(text[pos:end])
        state = slot + 1
        pos = end + 1
    return pos


def _scan(text: str) -> tuple[int, list[int]] | None:
    pos = 0
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        pos = 1
    if text[pos : pos + 1] != "P":
        return None
    values = [0] * 7
    pos = _scan_section(text, pos + 1, _DATE_SECTION, values)
    if pos is None:
        return None
    if text[pos : pos + 1] == "T":
        pos = _scan_section(text, pos + 1, _TIME_SECTION, values)
        if pos is None:
            return None
    if pos != len(text):
        return None
    return sign, values


def is_duration(text: str) -> bool:
    """Return True if ``text`` is an ISO-8601 duration (sign included)."""
    return _scan(text) is not None


def parse_iso_duration(text: str) -> tuple[int, ...] | None:
    """Parse ``text`` into signed (years, months, weeks, days, hours, minutes, seconds).

    Returns None when the text does not match the grammar.

    Example:
        >>> parse_iso_duration("-P3MT5M")
        (0, -3, 0, 0, 0, -5, 0)
    """
    scanned = _scan(text)
    if scanned is None:
        return None
    sign, values = scanned
    return tuple(value * sign for value in values)
