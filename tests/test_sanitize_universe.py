import pytest

from domain.models import Universe
from pipelines.sanitize_universe import (
    UniverseSanitizer,
    sanitize_universe,
    summarize_universe,
)


MALFORMED = [
    None,
    [],
    [1, 2, 3],
    42,
    3.5,
    "universe",
    True,
    {},
    {"metadata": []},
    {"metadata": {"name": 12}},
    {"classes": {"name": "Ventes"}},
    {"classes": [None, 1, "x", [], {"name": None}, {"name": "   "}]},
    {"classes": [{"name": "Ventes", "objects": "nope"}]},
    {"classes": [{"name": "Ventes", "objects": [{"name": {"a": 1}}, {"sql": "x"}]}]},
    {"tables": [{"name": ["t"]}], "joins": [{"name": "j", "from": 1, "to": None}]},
    {"joins": "a,b", "tables": None},
    {1: "odd key", "name": "x"},
    {"classes": [{"name": "A", "objects": [{"name": "o", "type": {"k": "v"}, "sql": 3}]}]},
]


def test_non_object_gives_empty_universe():
    universe = sanitize_universe(None)
    assert universe.metadata.name == "Univers"
    assert universe.metadata.description is None
    assert universe.classes == []
    assert universe.tables == []
    assert universe.joins == []


def test_missing_metadata_gets_default_name():
    universe = sanitize_universe({"classes": []})
    assert universe.metadata.name == "Univers sans nom"


def test_metadata_is_trimmed(raw_universe):
    universe = sanitize_universe(raw_universe)
    assert universe.metadata.name == "Efashion"
    assert universe.metadata.description == "Univers de démonstration"


def test_missing_sections_default_to_empty():
    universe = sanitize_universe({"metadata": {"name": "U"}})
    assert universe.classes == []
    assert universe.tables == []
    assert universe.joins == []


def test_unnamed_entities_are_dropped():
    universe = sanitize_universe({
        "classes": [
            {"description": "sans nom", "objects": [{"name": "Orphelin"}]},
            {"name": "  "},
            {"name": "Ventes", "objects": [{"type": "measure"}, {"name": " Marge "}]},
        ],
        "tables": [{"description": "t"}, {"name": "outlet"}],
        "joins": [{"from": "a", "to": "b"}, "join"],
    })
    assert [c.name for c in universe.classes] == ["Ventes"]
    assert [o.name for o in universe.classes[0].objects] == ["Marge"]
    assert [t.name for t in universe.tables] == ["outlet"]
    assert universe.joins == []


def test_non_string_fields_become_absent():
    universe = sanitize_universe({
        "classes": [{
            "name": "Ventes",
            "description": {"fr": "ventes"},
            "objects": [{"name": "Marge", "type": 3, "description": ["x"], "sql": None}],
        }],
        "joins": [{"name": "j", "from": 1, "to": "outlet", "expression": False}],
    })
    klass = universe.classes[0]
    assert klass.description is None
    obj = klass.objects[0]
    assert obj.type is None
    assert obj.description is None
    assert obj.sql is None
    join = universe.joins[0]
    assert join.from_table is None
    assert join.to_table == "outlet"
    assert join.expression is None


def test_blank_optional_strings_become_absent():
    universe = sanitize_universe({"tables": [{"name": "t", "description": "   "}]})
    assert universe.tables[0].description is None


def test_dangling_join_references_are_kept():
    universe = sanitize_universe({
        "tables": [],
        "joins": [{"name": "j", "from": "ghost_a", "to": "ghost_b"}],
    })
    assert universe.joins[0].from_table == "ghost_a"
    assert universe.joins[0].to_table == "ghost_b"


def test_join_serialises_with_from_and_to(raw_universe):
    document = sanitize_universe(raw_universe).to_json()
    assert document["joins"][0]["from"] == "fact_sales"
    assert document["joins"][0]["to"] == "outlet"


def test_entity_and_string_bounds():
    sanitizer = UniverseSanitizer(
        max_classes=2,
        max_objects_per_class=1,
        max_tables=1,
        max_joins=0,
        max_string_length=5,
        default_name="Univers",
        unnamed_name="Univers sans nom",
    )
    universe = sanitizer.sanitize({
        "classes": [
            {"name": "A", "objects": [{"name": "o1"}, {"name": "o2"}]},
            {"name": "B"},
            {"name": "C"},
        ],
        "tables": [{"name": "t1"}, {"name": "t2"}],
        "joins": [{"name": "j"}],
        "metadata": {"name": "abcd  efgh"},
    })
    assert [c.name for c in universe.classes] == ["A", "B"]
    assert [o.name for o in universe.classes[0].objects] == ["o1"]
    assert [t.name for t in universe.tables] == ["t1"]
    assert universe.joins == []
    assert universe.metadata.name == "abcd"


def test_check_entity_is_tagged():
    sanitizer = UniverseSanitizer.from_settings()
    accepted = sanitizer.check_entity({"name": " Ventes "})
    assert accepted.status == "accept"
    assert accepted.name == "Ventes"

    rejected = sanitizer.check_entity(["Ventes"])
    assert rejected.status == "reject"
    assert rejected.reason

    assert sanitizer.check_entity({"name": ""}).status == "reject"


def test_input_is_not_mutated(raw_universe):
    before = repr(raw_universe)
    sanitize_universe(raw_universe)
    assert repr(raw_universe) == before


@pytest.mark.parametrize("raw", MALFORMED)
def test_sanitize_is_total(raw):
    assert isinstance(sanitize_universe(raw), Universe)


@pytest.mark.parametrize("raw", MALFORMED + ["RAW_UNIVERSE"])
def test_sanitize_is_idempotent(raw, raw_universe):
    if raw == "RAW_UNIVERSE":
        raw = raw_universe
    once = sanitize_universe(raw)
    assert sanitize_universe(once) == once
    assert sanitize_universe(once.to_json()) == once


def test_summary_counts(raw_universe):
    summary = summarize_universe(sanitize_universe(raw_universe))
    assert summary.classes == 2
    assert summary.objects == 3
    assert summary.tables == 2
    assert summary.joins == 1


def test_summary_without_tables(raw_universe):
    del raw_universe["tables"]
    universe = sanitize_universe(raw_universe)
    assert universe.tables == []
    assert summarize_universe(universe).tables == 0


def test_total_object_budget_across_classes():
    sanitizer = UniverseSanitizer(
        max_classes=10,
        max_objects_per_class=3,
        max_tables=10,
        max_joins=10,
        max_string_length=100,
        default_name="Univers",
        unnamed_name="Univers sans nom",
        max_objects=4,
    )
    raw = {
        "classes": [
            {"name": "A", "objects": [{"name": "a1"}, {"name": "a2"}, {"name": "a3"}]},
            {"name": "B", "objects": [{"name": "b1"}, {"name": "b2"}, {"name": "b3"}]},
            {"name": "C", "objects": [{"name": "c1"}]},
        ],
    }
    universe = sanitizer.sanitize(raw)
    # classes past the budget are kept, only their objects are cut
    assert [c.name for c in universe.classes] == ["A", "B", "C"]
    assert [[o.name for o in c.objects] for c in universe.classes] == [
        ["a1", "a2", "a3"],
        ["b1"],
        [],
    ]
    assert sanitizer.sanitize(universe) == universe
