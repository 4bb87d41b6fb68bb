from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import StorageError
from .connection import DatabaseConnection


@contextmanager
def db_session(conn_factory: DatabaseConnection) -> Iterator[Connection]:
    """Run the body in one transaction; driver errors surface as StorageError."""
    try:
        with conn_factory.connect() as conn:
            yield conn
    except SQLAlchemyError as e:
        raise StorageError("Database error") from e


def fetchone(result) -> Optional[Dict[str, Any]]:
    row = result.mappings().first()
    return dict(row) if row else None


def fetchall(result) -> List[Dict[str, Any]]:
    return [dict(r) for r in result.mappings().all()]


def where_clause(clauses: Sequence[str]) -> str:
    if not clauses:
        return ""
    return " WHERE " + " AND ".join(clauses)
