"""Question rendering utilities for displaying quiz questions."""

from __future__ import annotations

from arena_app.core.markdown_renderer import renderer
from arena_app.core.models import Question


def render_question(question: Question, index: int, total: int, font_size: int = 14) -> str:
    """Render a quiz question as a standalone HTML document.

    Args:
        question: The question to show
        index: Zero-based position of the question in the attempt
        total: Number of questions in the attempt
        font_size: Font size in points for the question text (default 14)

    Returns:
        HTML string ready for display in QWebEngineView
    """
    heading = f"**Question {index + 1} of {total}**"
    markdown = "\n\n".join([heading, question.question_text.strip() or "(No question text)"])
    return renderer.render_full_document(markdown, title=f"Question {index + 1}", font_size=font_size)
