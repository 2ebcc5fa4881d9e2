"""Removal of terminal control sequences from output chunks."""

import re

# Applied in order; each pattern only ever matches text that starts with ESC.
CSI_SEQUENCE = re.compile(r"\x1b\[[0-9:;<=>]*[A-Za-z]")
PRIVATE_CSI_SEQUENCE = re.compile(r"\x1b\[\?[0-9;]*[A-Za-z]")
OSC_SEQUENCE = re.compile(r"\x1b\][^\x07]*\x07")
BARE_ESCAPE = re.compile(r"\x1b")

_PATTERNS = (CSI_SEQUENCE, PRIVATE_CSI_SEQUENCE, OSC_SEQUENCE, BARE_ESCAPE)


def scrub(text: str) -> str:
    """Strip ANSI/VT escape sequences from text.

    Printable characters, newlines and tabs pass through unchanged.
    Truncated sequences lose only their ESC byte, so the function never
    raises and scrubbing twice gives the same result as scrubbing once.
    """
    for pattern in _PATTERNS:
        text = pattern.sub("", text)
    return text
