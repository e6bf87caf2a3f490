"""
Console presentation of translations and notices.
"""

import sys
from typing import Optional, TextIO

from .translator import TranslationResult


def render_translation(result: TranslationResult) -> str:
    """Render the original and translated text side by side, one section each."""
    lines = [
        "Translation",
        "===========",
        "",
        "Original",
        "--------",
        result.original_text,
        "",
        "Translated",
        "----------",
        result.translated_text,
    ]
    return "\n".join(lines) + "\n"


class ConsolePresenter:
    """Writes translations to a stream and notices to an error stream."""

    def __init__(self, stream: Optional[TextIO] = None, notice_stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self.notice_stream = notice_stream or sys.stderr

    def show_translation(self, result: TranslationResult) -> None:
        self.stream.write(render_translation(result))
        self.stream.flush()

    def show_notice(self, message: str) -> None:
        self.notice_stream.write(f"{message}\n")
        self.notice_stream.flush()
