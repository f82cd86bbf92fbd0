"""
Single-segment wildcard matching.

A segment is the text between two `/` separators. Only `*` (zero or more characters)
and `?` (exactly one character) are special. Matching is case-sensitive everywhere.
"""

from __future__ import annotations

# Characters that make a pattern segment wildcard-bearing.
WILDCARD_CHARS = frozenset("*?")


def has_wildcard(text: str) -> bool:
    """True if `text` contains `*` or `?` anywhere."""
    return any(c in WILDCARD_CHARS for c in text)


def first_wildcard_index(text: str) -> int:
    """Index of the first `*` or `?` in `text`, or -1."""
    for i, c in enumerate(text):
        if c in WILDCARD_CHARS:
            return i
    return -1


def match_segment(name: str, segment: str) -> bool:
    """
    Test a directory entry name against one pattern segment.

    Both strings must be consumed entirely: `"abc"` does not match `"abcd"`. Uses the
    two-pointer scan with a single backtrack point at the most recent `*`.
    """
    n = 0
    s = 0
    star = -1
    star_n = 0

    while n < len(name):
        # A `*` in the pattern is always a wildcard, even against a literal `*` in the name.
        if s < len(segment) and segment[s] == "*":
            star = s
            star_n = n
            s += 1
        elif s < len(segment) and (segment[s] == "?" or segment[s] == name[n]):
            n += 1
            s += 1
        elif star >= 0:
            # Let the last `*` swallow one more character and retry.
            star_n += 1
            n = star_n
            s = star + 1
        else:
            return False

    # Trailing stars can match the empty remainder.
    while s < len(segment) and segment[s] == "*":
        s += 1
    return s == len(segment)
