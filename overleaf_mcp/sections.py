"""Section extraction for LaTeX documents.

Splits a flat document into an ordered list of :class:`Section` records, one
per sectioning command (``\\part`` down to ``\\subparagraph``, starred or not).
The result is deliberately flat: a ``\\subsection`` is never nested under the
preceding ``\\section``, and callers rely on plain document order.

Text before the first heading is not returned as a section.
"""

from __future__ import annotations

import re

from .models import Section
from .models import SectionKind

# Titles with nested braces are not supported; empty titles are not headings.
SECTION_PATTERN = re.compile(
    r"\\(part|chapter|section|subsection|subsubsection|paragraph|subparagraph)(\*?)\{([^{}]+)\}"
)


def extract_sections(text: str) -> list[Section]:
    """Return every section of ``text`` in document order.

    The content of a section is the text between the end of its marker and
    the start of the next marker (or the end of the document), stripped of
    surrounding whitespace.
    """
    sections: list[Section] = []
    open_match: re.Match[str] | None = None

    for match in SECTION_PATTERN.finditer(text):
        if open_match is not None:
            sections.append(_close(open_match, text[open_match.end() : match.start()]))
        open_match = match

    if open_match is None:
        return []

    sections.append(_close(open_match, text[open_match.end() :]))
    return sections


def _close(match: re.Match[str], body: str) -> Section:
    kind, star, title = match.groups()
    return Section(
        kind=SectionKind(kind),
        title=title,
        start_offset=match.start(),
        content=body.strip(),
        starred=bool(star),
    )


def find_section(sections: list[Section], title: str) -> Section | None:
    """Return the first section whose title equals ``title`` exactly."""
    for section in sections:
        if section.title == title:
            return section
    return None


def filter_sections(sections: list[Section], kind: SectionKind | str) -> list[Section]:
    """Return the sections of the given kind, keeping document order."""
    kind = SectionKind(kind)
    return [section for section in sections if section.kind == kind]
