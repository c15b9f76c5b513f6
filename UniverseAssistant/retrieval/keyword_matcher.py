# retrieval/keyword_matcher.py
import logging
from typing import List, Optional
from domain.models import Universe, UniverseMatches
from domain.normalize import normalize, token_set
from domain.ranking import overlap_score, rank
from config.settings import settings

logger = logging.getLogger(__name__)

class KeywordMatcher:
    """
    Lexical matcher over a sanitized universe.

    Score of an entity = number of distinct question tokens found among the
    tokens of its name, description and type-specific field (object sql,
    join expression and endpoints). Whole tokens only, no field weighting.
    """

    def __init__(self, max_question_length: int, max_question_tokens: int, max_per_category: Optional[int] = None):
        self.max_question_length = max_question_length
        self.max_question_tokens = max_question_tokens
        self.max_per_category = max_per_category

    def question_tokens(self, question: str) -> List[str]:
        if not isinstance(question, str):
            return []
        seen = []
        for t in normalize(question[:self.max_question_length]):
            if t not in seen:
                seen.append(t)
            if len(seen) >= self.max_question_tokens:
                break
        return seen

    def match(self, universe: Universe, question: str) -> UniverseMatches:
        q_terms = self.question_tokens(question)
        if not q_terms:
            return UniverseMatches()

        objects = [
            (overlap_score(q_terms, token_set(o.name, o.description, o.sql)), o)
            for c in universe.classes
            for o in c.objects
        ]
        classes = [(overlap_score(q_terms, token_set(c.name, c.description)), c) for c in universe.classes]
        tables = [(overlap_score(q_terms, token_set(t.name, t.description)), t) for t in universe.tables]
        joins = [
            (overlap_score(q_terms, token_set(j.name, j.expression, j.from_table, j.to_table)), j)
            for j in universe.joins
        ]

        matches = UniverseMatches(
            objects=rank(objects, self.max_per_category),
            classes=rank(classes, self.max_per_category),
            tables=rank(tables, self.max_per_category),
            joins=rank(joins, self.max_per_category),
        )
        logger.info(
            f"Question tokens {q_terms}: {len(matches.objects)} objects, {len(matches.classes)} classes, "
            f"{len(matches.tables)} tables, {len(matches.joins)} joins matched"
        )
        return matches

def match_universe(universe: Universe, question: str) -> UniverseMatches:
    matcher = KeywordMatcher(
        settings.MAX_QUESTION_LENGTH,
        settings.MAX_QUESTION_TOKENS,
        settings.MAX_MATCHES_PER_CATEGORY,
    )
    return matcher.match(universe, question)
