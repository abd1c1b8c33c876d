"""Field predicates used to narrow candidate sets at the store.

A predicate set is a list of predicates combined with AND. The store decides
how to evaluate them (SQL WHERE for SQLite); the scorer remains the final
authority on relevance.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Eq(BaseModel):
    """field == value"""

    model_config = ConfigDict(frozen=True)

    field: str
    value: Any


class In(BaseModel):
    """field is one of values"""

    model_config = ConfigDict(frozen=True)

    field: str
    values: tuple[Any, ...]


class AnyOf(BaseModel):
    """OR of equalities on one field. A None member matches a null field."""

    model_config = ConfigDict(frozen=True)

    field: str
    values: tuple[Any, ...]


Predicate = Eq | In | AnyOf
