# domain/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

class UniverseMetadata(BaseModel):
    name: str
    description: Optional[str] = None

class BusinessObject(BaseModel):
    name: str
    type: Optional[str] = None
    description: Optional[str] = None
    sql: Optional[str] = None

class UniverseClass(BaseModel):
    name: str
    description: Optional[str] = None
    objects: List[BusinessObject] = []

class UniverseTable(BaseModel):
    name: str
    description: Optional[str] = None

class UniverseJoin(BaseModel):
    # "from" is a keyword, the JSON keys are kept through aliases
    name: str
    from_table: Optional[str] = Field(default=None, alias="from")
    to_table: Optional[str] = Field(default=None, alias="to")
    expression: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

class Universe(BaseModel):
    metadata: UniverseMetadata
    classes: List[UniverseClass] = []
    tables: List[UniverseTable] = []
    joins: List[UniverseJoin] = []

    def to_json(self) -> dict:
        """Document form, as exchanged with clients (joins use `from`/`to`)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

class UniverseSummary(BaseModel):
    classes: int = 0
    objects: int = 0
    tables: int = 0
    joins: int = 0

class UniverseMatches(BaseModel):
    objects: List[BusinessObject] = []
    classes: List[UniverseClass] = []
    tables: List[UniverseTable] = []
    joins: List[UniverseJoin] = []

    def is_empty(self) -> bool:
        return not (self.objects or self.classes or self.tables or self.joins)

class QueryResult(BaseModel):
    answer: str
    matches: UniverseMatches

class MatchLine(BaseModel):
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    extra: Optional[str] = None

class MatchPanel(BaseModel):
    title: str
    empty_label: str
    items: List[MatchLine] = []
