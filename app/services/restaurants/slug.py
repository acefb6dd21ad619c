import re
import unicodedata

_SEPARATORS_RE = re.compile(r"[\s\-_]+")


def accent_fold(text: str) -> str:
    folded = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in folded if not unicodedata.combining(ch))


def generate_slug(name: str) -> str:
    """turn a restaurant name into a url slug, e.g. 'Pizza do João' -> 'pizza-do-joao'."""
    folded = accent_fold(name).lower()
    folded = _SEPARATORS_RE.sub("-", folded)
    slug = "".join(ch for ch in folded if ch.isalnum() or ch == "-")
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")
