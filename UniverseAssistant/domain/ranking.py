# domain/ranking.py
from typing import Iterable, List, Optional, Sequence, Set, Tuple, TypeVar

T = TypeVar("T")

def overlap_score(question_tokens: Sequence[str], entity_tokens: Set[str]) -> int:
    return sum(1 for t in question_tokens if t in entity_tokens)

def rank(scored: Iterable[Tuple[int, T]], limit: Optional[int] = None) -> List[T]:
    """Drop zero scores, order by score desc. sort() is stable: ties keep declaration order."""
    kept = [(score, item) for score, item in scored if score > 0]
    kept.sort(key=lambda x: x[0], reverse=True)
    items = [item for _, item in kept]
    if limit is not None:
        items = items[:max(0, limit)]
    return items
