"""
Display cleanup for model-produced text.

The model is asked for plain text but sometimes answers in markdown anyway.
``clean_text`` strips the common markers before the text is shown. It is a
lossy, best-effort pass: a literal ``*`` or ``#`` in the document text is
removed too, and markers the rules do not know about are left in place.

Examples:
    >>> clean_text("**bold** and # heading\\n\\n\\n\\nline")
    'bold and heading\\n\\nline'
    >>> clean_text("`code` and *italic*")
    'code and italic'
"""

import re

from app.common.models import ExtractionResult

# Applied in order; each pattern is compiled once at import time
CLEANUP_RULES: list[tuple[re.Pattern[str], str]] = [
    # **bold**
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    # *italic*
    (re.compile(r"\*(.*?)\*"), r"\1"),
    # __bold__
    (re.compile(r"__(.*?)__"), r"\1"),
    # `code`
    (re.compile(r"`(.*?)`"), r"\1"),
    # heading markers, "# " through "###### "
    (re.compile(r"#{1,6}\s"), ""),
    # three or more newlines become one blank line
    (re.compile(r"\n{3,}"), "\n\n"),
]


def clean_text(text: str) -> str:
    """Strip markdown markers and excess blank lines, then trim."""
    for pattern, replacement in CLEANUP_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


def clean_result(result: ExtractionResult) -> ExtractionResult:
    """Return a copy of ``result`` with the summary and every heading cleaned."""
    return result.model_copy(
        update={
            "headings": [clean_text(heading) for heading in result.headings],
            "summary": clean_text(result.summary),
        }
    )
