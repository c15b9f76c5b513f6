# pipelines/sanitize_universe.py
import logging
from typing import Any, List, Literal, NamedTuple, Optional
from domain.models import (
    BusinessObject,
    Universe,
    UniverseClass,
    UniverseJoin,
    UniverseMetadata,
    UniverseSummary,
    UniverseTable,
)
from config.settings import Settings, settings

logger = logging.getLogger(__name__)

class EntityCheck(NamedTuple):
    """Outcome of the structural check on one raw entity."""
    status: Literal["accept", "reject"]
    name: Optional[str] = None
    fields: Optional[dict] = None
    reason: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.status == "accept"

class UniverseSanitizer:
    """
    Turns any JSON value into a well-formed Universe. Never raises.

    Each entity goes through two phases: `check_entity` decides accept/reject
    (must be an object with a non-blank name), then the accepted mapping is
    coerced field by field. Rejected entities are dropped, never defaulted.
    """

    def __init__(
        self,
        max_classes: int,
        max_objects_per_class: int,
        max_tables: int,
        max_joins: int,
        max_string_length: int,
        default_name: str,
        unnamed_name: str,
        max_objects: Optional[int] = None,
    ):
        self.max_classes = max_classes
        self.max_objects_per_class = max_objects_per_class
        self.max_tables = max_tables
        self.max_joins = max_joins
        self.max_string_length = max_string_length
        self.default_name = default_name
        self.unnamed_name = unnamed_name
        self.max_objects = max_objects

    @classmethod
    def from_settings(cls, s: Settings = settings) -> "UniverseSanitizer":
        return cls(
            s.MAX_CLASSES,
            s.MAX_OBJECTS_PER_CLASS,
            s.MAX_TABLES,
            s.MAX_JOINS,
            s.MAX_STRING_LENGTH,
            s.DEFAULT_UNIVERSE_NAME,
            s.UNNAMED_UNIVERSE_NAME,
            s.MAX_OBJECTS,
        )

    def clean_str(self, value: Any) -> Optional[str]:
        # Non-strings are treated as absent rather than stringified.
        if not isinstance(value, str):
            return None
        cleaned = value.strip()[:self.max_string_length].strip()
        return cleaned or None

    def check_entity(self, raw: Any) -> EntityCheck:
        if not isinstance(raw, dict):
            return EntityCheck(status="reject", reason=f"not an object ({type(raw).__name__})")
        name = self.clean_str(raw.get("name"))
        if name is None:
            return EntityCheck(status="reject", reason="missing or blank name")
        return EntityCheck(status="accept", name=name, fields=raw)

    def _accepted(self, raw_list: Any, limit: int, kind: str) -> List[EntityCheck]:
        if not isinstance(raw_list, list):
            if raw_list is not None:
                logger.debug(f"[{kind}] expected a list, got {type(raw_list).__name__}; using []")
            return []
        if len(raw_list) > limit:
            logger.warning(f"[{kind}] {len(raw_list)} entries, only the first {limit} are kept")

        checks = []
        for i, raw in enumerate(raw_list[:limit]):
            check = self.check_entity(raw)
            if not check.accepted:
                logger.debug(f"[{kind}] dropped entry #{i}: {check.reason}")
                continue
            checks.append(check)
        return checks

    def _metadata(self, raw: Any) -> UniverseMetadata:
        if not isinstance(raw, dict):
            return UniverseMetadata(name=self.unnamed_name)
        return UniverseMetadata(
            name=self.clean_str(raw.get("name")) or self.unnamed_name,
            description=self.clean_str(raw.get("description")),
        )

    def _object(self, check: EntityCheck) -> BusinessObject:
        f = check.fields
        return BusinessObject(
            name=check.name,
            type=self.clean_str(f.get("type")),
            description=self.clean_str(f.get("description")),
            sql=self.clean_str(f.get("sql")),
        )

    def _class(self, check: EntityCheck, objects_left: int) -> UniverseClass:
        f = check.fields
        limit = max(0, min(self.max_objects_per_class, objects_left))
        objects = self._accepted(f.get("objects"), limit, f"class {check.name!r} objects")
        return UniverseClass(
            name=check.name,
            description=self.clean_str(f.get("description")),
            objects=[self._object(o) for o in objects],
        )

    def _classes(self, raw_list: Any) -> List[UniverseClass]:
        # objects share one budget across classes, in declaration order
        objects_left = self.max_objects if self.max_objects is not None else self.max_classes * self.max_objects_per_class
        classes = []
        for check in self._accepted(raw_list, self.max_classes, "classes"):
            klass = self._class(check, objects_left)
            objects_left -= len(klass.objects)
            classes.append(klass)
        return classes

    def _table(self, check: EntityCheck) -> UniverseTable:
        return UniverseTable(name=check.name, description=self.clean_str(check.fields.get("description")))

    def _join(self, check: EntityCheck) -> UniverseJoin:
        # Table references are not checked against `tables`.
        f = check.fields
        return UniverseJoin(
            name=check.name,
            from_table=self.clean_str(f.get("from")),
            to_table=self.clean_str(f.get("to")),
            expression=self.clean_str(f.get("expression")),
        )

    def sanitize(self, raw: Any) -> Universe:
        if isinstance(raw, Universe):
            raw = raw.to_json()
        if not isinstance(raw, dict):
            logger.debug(f"Universe is not an object ({type(raw).__name__}); using the empty universe")
            return Universe(metadata=UniverseMetadata(name=self.default_name))

        universe = Universe(
            metadata=self._metadata(raw.get("metadata")),
            classes=self._classes(raw.get("classes")),
            tables=[self._table(t) for t in self._accepted(raw.get("tables"), self.max_tables, "tables")],
            joins=[self._join(j) for j in self._accepted(raw.get("joins"), self.max_joins, "joins")],
        )
        s = summarize_universe(universe)
        logger.info(
            f"Sanitized universe {universe.metadata.name!r}: "
            f"{s.classes} classes, {s.objects} objects, {s.tables} tables, {s.joins} joins"
        )
        return universe

def summarize_universe(universe: Universe) -> UniverseSummary:
    return UniverseSummary(
        classes=len(universe.classes),
        objects=sum(len(c.objects) for c in universe.classes),
        tables=len(universe.tables),
        joins=len(universe.joins),
    )

def sanitize_universe(raw: Any) -> Universe:
    return UniverseSanitizer.from_settings().sanitize(raw)
