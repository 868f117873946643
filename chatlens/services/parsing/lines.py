"""Line classification and entry segmentation for plain-text chat exports.

Handles lines such as::

    1/5/25, 10:30 AM - John: Hello
    01/05/2025, 22:30 - John: Hello
    [1/5/25, 10:30:00 AM] - John: Hello
    5.1.25, 10.30 – John: Hello

Every line is either the start of a new entry, a continuation of the open
entry, or noise before the first entry.
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from chatlens.services.parsing.types import Meridiem, RawEntry

# ASCII digits only; other scripts' digits are ordinary text.
ENTRY_START_RE = re.compile(
    r"^\[?"
    r"(\d{1,2}[/.\-]\d{1,2}[/.\-]\d{2,4})"
    r",?\s"
    r"(\d{1,2}[:.]\d{2}(?:[:.]\d{2})?)"
    r"\s?([AaPp][Mm])?"
    r"\]?\s*[-–—]\s*"
    r"(.*)",
    re.ASCII,
)


@dataclass(frozen=True, slots=True)
class LineMatch:
    date_token: str
    time_token: str
    meridiem: Meridiem | None
    remainder: str


# Continuation lines newest first: (line, older_lines) or None.
Continuation = tuple[str, "Continuation"] | None


@dataclass(frozen=True, slots=True)
class NoOpenEntry:
    pass


@dataclass(frozen=True, slots=True)
class OpenEntry:
    start: LineMatch
    continuation: Continuation = None

    def append(self, line: str) -> "OpenEntry":
        return OpenEntry(start=self.start, continuation=(line, self.continuation))

    def to_entry(self) -> RawEntry:
        lines: list[str] = []
        node = self.continuation
        while node is not None:
            line, node = node
            lines.append(line)
        lines.append(self.start.remainder)
        lines.reverse()
        return RawEntry(
            date_token=self.start.date_token,
            time_token=self.start.time_token,
            meridiem=self.start.meridiem,
            body="\n".join(lines),
        )


LineState = NoOpenEntry | OpenEntry

INITIAL_STATE: LineState = NoOpenEntry()


def classify_line(line: str) -> LineMatch | None:
    match = ENTRY_START_RE.match(line)
    if not match:
        return None
    date_token, time_token, meridiem, remainder = match.groups()
    return LineMatch(
        date_token=date_token,
        time_token=time_token,
        meridiem=Meridiem(meridiem.upper()) if meridiem else None,
        remainder=remainder,
    )


def step(state: LineState, line: str) -> tuple[LineState, RawEntry | None]:
    """Advance the segmenter by one line without touching ``state``.

    Returns the next state and the entry finalized by this line, if any.
    Continuation lines are kept verbatim, including surrounding whitespace.
    """
    matched = classify_line(line)
    if matched is not None:
        finalized = state.to_entry() if isinstance(state, OpenEntry) else None
        return OpenEntry(start=matched), finalized
    if isinstance(state, OpenEntry):
        return state.append(line), None
    return state, None


def finish(state: LineState) -> RawEntry | None:
    if isinstance(state, OpenEntry):
        return state.to_entry()
    return None


def iter_entries(lines: Iterable[str]) -> Iterator[RawEntry]:
    state = INITIAL_STATE
    for line in lines:
        state, finalized = step(state, line)
        if finalized is not None:
            yield finalized
    last = finish(state)
    if last is not None:
        yield last


def split_lines(text: str) -> list[str]:
    # Only line feeds separate lines; carriage returns stay in the body.
    return text.split("\n")


def split_entries(text: str) -> list[RawEntry]:
    return list(iter_entries(split_lines(text)))
