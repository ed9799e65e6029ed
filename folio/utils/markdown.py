"""
Markdown Utilities

Renders author-written markdown to an HTML fragment for the document body.
"""

from markdown_it import MarkdownIt

_MD_PARSER: MarkdownIt | None = None


def _get_markdown_parser() -> MarkdownIt:
    global _MD_PARSER
    if _MD_PARSER is None:
        # js-default matches markdown-it defaults (tables, strikethrough); html passes raw blocks through
        _MD_PARSER = MarkdownIt("js-default", {"html": True})
    return _MD_PARSER


def render_markdown(text: str | None) -> str:
    """
    Convert markdown text to an HTML fragment.

    Args:
        text: Markdown source (None is treated as empty)

    Returns:
        Rendered HTML fragment (empty string for empty input)
    """
    if not text:
        return ""
    return _get_markdown_parser().render(text)
