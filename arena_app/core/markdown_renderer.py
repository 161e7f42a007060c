"""Markdown rendering of question text for the Qt question view.

Questions arrive from the API as plain text that may contain Markdown
emphasis, code spans or HTML entities from the upstream question bank. Raw
HTML is never enabled, so anything tag-like in the source is escaped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts question markdown into HTML fragments or full documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = html.unescape(markdown_text or "").strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def wrap_document(self, body_html: str, title: str = "QuizArena", font_size: int = 14) -> str:
        """Wrap a fragment inside a minimal standalone HTML document."""

        return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{html.escape(title)}</title>
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 1rem; background: transparent; }}
      .question-html {{ font-size: {font_size}pt; line-height: 1.5; }}
    </style>
  </head>
  <body>
    <div class="question-html">{body_html}</div>
  </body>
</html>"""

    def render_full_document(self, markdown_text: str, title: str = "QuizArena", font_size: int = 14) -> str:
        """Convenience wrapper to render markdown into a complete document."""

        fragment = self.render_fragment(markdown_text)
        return self.wrap_document(fragment, title=title, font_size=font_size)


# Shared instance; MarkdownIt is safe to reuse for read-only renders.
renderer = MarkdownRenderer()
