# reasoning/answer_builder.py
from typing import List
from domain.models import MatchLine, MatchPanel, UniverseMatches
from reasoning.answer_templates import (
    ANSWER_PREFIX,
    CLASS_SUBTITLE,
    CLASSES_TABLES_PANEL,
    FALLBACK_ANSWER,
    JOINS_PANEL,
    OBJECTS_PANEL,
    TABLE_SUBTITLE,
    count_label,
)
from config.settings import settings

class AnswerBuilder:
    def __init__(self, top_names: int):
        self.top_names = top_names

    def _names(self, names: List[str]) -> str:
        shown = names[:max(0, self.top_names)]
        if not shown:
            return ""
        more = ", …" if len(names) > len(shown) else ""
        return f" ({', '.join(shown)}{more})"

    def build(self, matches: UniverseMatches) -> str:
        if matches.is_empty():
            return FALLBACK_ANSWER

        parts = []
        for category in ("objects", "classes", "tables", "joins"):
            items = getattr(matches, category)
            if items:
                parts.append(count_label(category, len(items)) + self._names([i.name for i in items]))

        if len(parts) == 1:
            found = parts[0]
        else:
            found = ", ".join(parts[:-1]) + " et " + parts[-1]
        return f"{ANSWER_PREFIX} {found}."

    def panels(self, matches: UniverseMatches) -> List[MatchPanel]:
        """Display lines per result panel: objects, classes + tables, joins."""
        objects = [
            MatchLine(title=o.name, subtitle=o.type, description=o.description, extra=o.sql)
            for o in matches.objects
        ]
        classes_tables = [
            MatchLine(title=c.name, subtitle=CLASS_SUBTITLE, description=c.description)
            for c in matches.classes
        ] + [
            MatchLine(title=t.name, subtitle=TABLE_SUBTITLE, description=t.description)
            for t in matches.tables
        ]
        joins = [
            MatchLine(title=j.name, subtitle=f"{j.from_table or '?'} ↔ {j.to_table or '?'}", description=j.expression)
            for j in matches.joins
        ]
        return [
            MatchPanel(title=OBJECTS_PANEL[0], empty_label=OBJECTS_PANEL[1], items=objects),
            MatchPanel(title=CLASSES_TABLES_PANEL[0], empty_label=CLASSES_TABLES_PANEL[1], items=classes_tables),
            MatchPanel(title=JOINS_PANEL[0], empty_label=JOINS_PANEL[1], items=joins),
        ]

def build_answer(matches: UniverseMatches) -> str:
    return AnswerBuilder(settings.ANSWER_TOP_NAMES).build(matches)

def render_match_lines(matches: UniverseMatches) -> List[MatchPanel]:
    return AnswerBuilder(settings.ANSWER_TOP_NAMES).panels(matches)
