"""
Templating context logger.

Wraps loguru with the [template] prefix; templating modules log through here.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_theme_resolved(lang: str, theme_name: str, used_default_css: bool) -> None:
    """Record which stylesheet a document will get."""
    if used_default_css:
        _log_warning(f"Active {lang} theme '{theme_name}' has no CSS, using built-in default")
    else:
        _log_debug(f"Using {lang} theme '{theme_name}'")


def log_composed(title_line: str, lang_code: str, html_size: int, logo_embedded: bool) -> None:
    """Summarize a composed document."""
    _log_debug(
        f"Composed '{title_line}' (lang={lang_code}, {html_size} chars, "
        f"logo={'embedded' if logo_embedded else 'remote'})"
    )
