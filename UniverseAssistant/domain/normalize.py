# domain/normalize.py
import re
import unicodedata
from typing import List, Optional, Set

_SEPARATORS = re.compile(r"[\W_]+")

def fold(text: str) -> str:
    """Lower-case and strip diacritics ("Márge" -> "marge")."""
    decomposed = unicodedata.normalize("NFKD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))

def normalize(text: Optional[str]) -> List[str]:
    """
    Tokenize text for matching. Used on both the question and the entity
    fields so the comparison stays symmetric:
    - lowercase, diacritics removed
    - split on anything that is not a letter or digit
    - empty tokens dropped
    """
    if not isinstance(text, str) or not text:
        return []
    return [t for t in _SEPARATORS.split(fold(text)) if t]

def token_set(*fields: Optional[str]) -> Set[str]:
    tokens: Set[str] = set()
    for f in fields:
        tokens.update(normalize(f))
    return tokens
