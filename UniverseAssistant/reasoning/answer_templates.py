# reasoning/answer_templates.py
FALLBACK_ANSWER = "Aucun élément pertinent n'a été trouvé dans l'univers pour cette question."

ANSWER_PREFIX = "J'ai trouvé"

# category -> (singular, plural)
CATEGORY_LABELS = {
    "objects": ("objet", "objets"),
    "classes": ("classe", "classes"),
    "tables": ("table", "tables"),
    "joins": ("jointure", "jointures"),
}

# Result panels: (title, empty label)
OBJECTS_PANEL = ("Objets détectés", "Aucun objet pertinent.")
CLASSES_TABLES_PANEL = ("Classes et tables", "Aucune classe ou table associée.")
JOINS_PANEL = ("Jointures", "Aucune jointure correspondante.")

CLASS_SUBTITLE = "Classe"
TABLE_SUBTITLE = "Table"

def count_label(category: str, count: int) -> str:
    singular, plural = CATEGORY_LABELS[category]
    # French: 0 and 1 take the singular
    return f"{count} {singular if count < 2 else plural}"
