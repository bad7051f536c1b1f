import re

MAX_CONTENT_CHARS = 3000

_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_STYLE_BLOCK = re.compile(r"<style\b[^<]*(?:(?!</style>)<[^<]*)*</style>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")


def extract_text(html: str, max_chars: int = MAX_CONTENT_CHARS) -> str:
    """
    Reduce raw HTML to a bounded plain-text excerpt.

    Script and style blocks are dropped, remaining tags are stripped and
    whitespace is collapsed. This is a textual pass, not a parse: malformed
    markup is tolerated and never raises.

    Args:
        html: Raw page markup.
        max_chars: Maximum length of the returned text.

    Returns:
        str: Plain text, at most ``max_chars`` characters long.
    """
    if not html:
        return ""

    text = _SCRIPT_BLOCK.sub(" ", html)
    text = _STYLE_BLOCK.sub(" ", text)
    text = _TAG.sub(" ", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return text[:max_chars]
