import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_DASHES = re.compile(r"-+")


def slugify(text: str) -> str:
    """
    Derive a URL-safe slug from a display name.

    >>> slugify("Hambúrguer Especial!")
    'hamburguer-especial'
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = _NON_ALNUM.sub("-", stripped)
    slug = _DASHES.sub("-", slug)
    return slug.strip("-")
