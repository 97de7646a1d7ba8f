"""
Ignored region extraction.

Code between a ``// %flint: pause`` line and a ``// %flint: resume`` line
is intentionally unconventional and must not be flagged by the style
rules. The suppressor blanks those regions out while keeping every line
and every newline exactly where it was, so line numbers reported against
the rewritten text match the original file.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple


PAUSE_MARKER = "// %flint: pause"
RESUME_MARKER = "// %flint: resume"


class MarkerKind(Enum):
    """Kinds of marker comments."""
    PAUSE = "pause"
    RESUME = "resume"


@dataclass(frozen=True)
class Marker:
    """A marker line found in a file."""
    kind: MarkerKind
    line: int
    offset: int


def iter_lines(text: str) -> Iterator[Tuple[int, int, str]]:
    """
    Lazily split text on newlines.

    Yields ``(line_number, offset, line)`` tuples where ``line`` excludes
    the ``\\n`` terminator and ``offset`` is the index of its first
    character. A trailing newline does not produce an extra empty line.
    """
    start = 0
    line_number = 1
    length = len(text)

    while start < length:
        end = text.find("\n", start)
        if end == -1:
            end = length
        yield line_number, start, text[start:end]
        start = end + 1
        line_number += 1


class MarkerScanner:
    """
    Finds pause/resume marker lines in a file's text.

    Iterating the scanner restarts the scan, so the same scanner can be
    walked any number of times. Pairing is not validated here.
    """

    def __init__(
        self,
        text: str,
        pause_marker: str = PAUSE_MARKER,
        resume_marker: str = RESUME_MARKER,
    ):
        self.text = text
        self.pause_marker = pause_marker
        self.resume_marker = resume_marker

    def classify(self, line: str) -> Optional[MarkerKind]:
        """Return the marker kind of a line, or None for ordinary lines."""
        stripped = line.strip()
        if stripped == self.pause_marker:
            return MarkerKind.PAUSE
        if stripped == self.resume_marker:
            return MarkerKind.RESUME
        return None

    def __iter__(self) -> Iterator[Marker]:
        for line_number, offset, line in iter_lines(self.text):
            kind = self.classify(line)
            if kind is not None:
                yield Marker(kind=kind, line=line_number, offset=offset)


def _blank(line: str) -> str:
    # Keep a CR belonging to a CRLF terminator.
    body = line[:-1] if line.endswith("\r") else line
    return " " * len(body) + line[len(body):]


class RegionSuppressor:
    """
    Blanks out the code between pause and resume markers.

    There is a single suppression flag, not a nesting depth: a repeated
    pause is a no-op, a resume without a pause is a no-op, and a pause
    that is never resumed suppresses through the end of the file. Marker
    lines themselves are always blanked.
    """

    def __init__(self, pause_marker: str = PAUSE_MARKER, resume_marker: str = RESUME_MARKER):
        self.pause_marker = pause_marker
        self.resume_marker = resume_marker

    def suppress(self, text: str) -> str:
        """Return text of identical shape with suppressed regions blanked."""
        scanner = MarkerScanner(text, self.pause_marker, self.resume_marker)
        markers = {marker.line: marker for marker in scanner}
        if not markers:
            return text

        lines = text.split("\n")
        suppressing = False

        for index, line in enumerate(lines):
            marker = markers.get(index + 1)

            if marker is not None:
                suppressing = marker.kind is MarkerKind.PAUSE
                lines[index] = _blank(line)
            elif suppressing:
                lines[index] = _blank(line)

        return "\n".join(lines)


def remove_ignored_code(
    text: str,
    pause_marker: str = PAUSE_MARKER,
    resume_marker: str = RESUME_MARKER,
) -> str:
    """Convenience wrapper around :class:`RegionSuppressor`."""
    return RegionSuppressor(pause_marker, resume_marker).suppress(text)
