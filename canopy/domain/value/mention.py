"""@mention parsing.

A mention is '@' followed by one or more word runs separated by single
spaces ('@Maria Santos'). It must start the text or follow whitespace
('foo@bar' is not a mention) and must end at whitespace, one of
``. , ; : ! ?`` or the end of the text. Name matching is greedy, so
'@Maria Santos, hi' mentions 'Maria Santos'.

Extraction (at creation) and segmentation (at render) share one pattern, so a
mention recorded on a comment is always highlighted when it is displayed.
"""

import re

from canopy.domain.value.types import SegmentKind, TextSegment

MENTION_PATTERN = re.compile(r"(?<!\S)@(\w+(?: \w+)*)(?=[\s.,;:!?]|$)")


def extract_mentions(text: str | None) -> list[str]:
    """Extract mentioned names in order of first appearance.

    Args:
        text: Comment text

    Returns:
        Unique mentioned names without the leading '@'
    """
    if not isinstance(text, str) or not text:
        return []
    names: list[str] = []
    for match in MENTION_PATTERN.finditer(text):
        name = match.group(1)
        if name not in names:
            names.append(name)
    return names


def segment_text(text: str | None) -> list[TextSegment]:
    """Split text into plain and mention segments.

    Concatenating the segments' text always reproduces ``text`` exactly.
    Only the '@name' token itself is tagged as a mention; surrounding
    whitespace and punctuation stay in the plain segments.

    Args:
        text: Comment text

    Returns:
        Ordered segments (empty list for empty text)
    """
    if not isinstance(text, str) or not text:
        return []

    segments: list[TextSegment] = []
    last_end = 0
    for match in MENTION_PATTERN.finditer(text):
        start, end = match.span()
        if start > last_end:
            segments.append(
                TextSegment(kind=SegmentKind.PLAIN, text=text[last_end:start])
            )
        segments.append(TextSegment(kind=SegmentKind.MENTION, text=text[start:end]))
        last_end = end

    if last_end < len(text):
        segments.append(TextSegment(kind=SegmentKind.PLAIN, text=text[last_end:]))
    return segments
