# ============================================================================
# DATABASE MODEL
# ============================================================================
# STATUS: Core - In-memory schema model with annotations
# PURPOSE: Tables, columns and indexes as reported by the host introspector
# CREATED: 18 OCT 2026
# EXPORTS: AnnotationStore, DatabaseModel, DatabaseTable, DatabaseColumn, DatabaseIndex
# DEPENDENCIES: dataclasses
# ============================================================================
"""
Database Model

The host pipeline owns this structure: it builds it during introspection and
discards it after code generation. The enricher borrows it for one pass and
only ever writes annotations.

Annotation flow:
    CatalogEnricher  --writes-->  AnnotationStore  --read by-->  resolver / rewriter
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from core.contracts import AnnotationName


AnnotationKey = Union[AnnotationName, str]


class AnnotationStore:
    """
    Annotation key -> value mapping for one schema-model node.

    Keys are restricted to AnnotationName. One value per key; the last
    write wins.
    """

    def __init__(self, initial: Optional[Dict[AnnotationKey, Any]] = None):
        self._values: Dict[AnnotationName, Any] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    @staticmethod
    def _key(key: AnnotationKey) -> AnnotationName:
        try:
            return AnnotationName(key)
        except ValueError:
            raise ValueError(f"Unknown annotation key: {key!r}") from None

    def set(self, key: AnnotationKey, value: Any) -> None:
        self._values[self._key(key)] = value

    def get(self, key: AnnotationKey, default: Any = None) -> Any:
        return self._values.get(self._key(key), default)

    def find(self, key: AnnotationKey) -> Optional[Any]:
        """Value for key, or None when absent."""
        return self._values.get(self._key(key))

    def remove(self, key: AnnotationKey) -> Any:
        return self._values.pop(self._key(key), None)

    def items(self) -> List[Tuple[AnnotationName, Any]]:
        return list(self._values.items())

    def to_dict(self) -> Dict[str, Any]:
        return {key.value: value for key, value in self._values.items()}

    def __contains__(self, key: object) -> bool:
        try:
            return AnnotationName(key) in self._values
        except ValueError:
            return False

    def __iter__(self) -> Iterator[AnnotationName]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnnotationStore):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"AnnotationStore({self.to_dict()!r})"


class Annotatable:
    """Annotation accessors shared by every schema-model node."""

    annotations: AnnotationStore

    def set_annotation(self, name: AnnotationKey, value: Any) -> None:
        self.annotations.set(name, value)

    def find_annotation(self, name: AnnotationKey) -> Optional[Any]:
        return self.annotations.find(name)

    def get_annotation(self, name: AnnotationKey, default: Any = None) -> Any:
        return self.annotations.get(name, default)


@dataclass
class DatabaseColumn(Annotatable):
    """A column as reported by the host introspector."""
    name: str
    store_type: Optional[str] = None
    nullable: bool = True
    annotations: AnnotationStore = field(default_factory=AnnotationStore)

    @property
    def effective_store_type(self) -> Optional[str]:
        """Catalog-exact store type when enriched, else what the host reported."""
        return self.annotations.get(AnnotationName.STORE_TYPE) or self.store_type


@dataclass
class DatabaseIndex(Annotatable):
    """An index as reported by the host introspector."""
    name: str
    columns: List[str] = field(default_factory=list)
    is_unique: bool = False
    annotations: AnnotationStore = field(default_factory=AnnotationStore)


@dataclass
class DatabaseTable(Annotatable):
    """A table with its columns and indexes."""
    name: str
    schema: Optional[str] = None
    columns: List[DatabaseColumn] = field(default_factory=list)
    indexes: List[DatabaseIndex] = field(default_factory=list)
    annotations: AnnotationStore = field(default_factory=AnnotationStore)

    def find_column(self, name: str) -> Optional[DatabaseColumn]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def find_index(self, name: str) -> Optional[DatabaseIndex]:
        for index in self.indexes:
            if index.name == name:
                return index
        return None


@dataclass
class DatabaseModel(Annotatable):
    """Root of the schema model."""
    database_name: Optional[str] = None
    default_schema: Optional[str] = None
    tables: List[DatabaseTable] = field(default_factory=list)
    annotations: AnnotationStore = field(default_factory=AnnotationStore)

    def schema_of(self, table: DatabaseTable, fallback: Optional[str] = None) -> Optional[str]:
        """Schema a table lives in: its own, else the model default, else fallback."""
        return table.schema or self.default_schema or fallback

    def find_table(
        self,
        schema: Optional[str],
        name: str,
        fallback_schema: Optional[str] = None,
    ) -> Optional[DatabaseTable]:
        """
        Find a table by schema and name.

        Tables without a schema are matched against the model's default
        schema, then fallback_schema.
        """
        for table in self.tables:
            table_schema = self.schema_of(table, fallback_schema)
            if table.name == name and table_schema == schema:
                return table
        return None

    def iter_columns(self) -> Iterator[Tuple[DatabaseTable, DatabaseColumn]]:
        for table in self.tables:
            for column in table.columns:
                yield table, column


__all__ = [
    "AnnotationStore",
    "Annotatable",
    "DatabaseColumn",
    "DatabaseIndex",
    "DatabaseTable",
    "DatabaseModel",
]
