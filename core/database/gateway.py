"""
Data Store Gateway

Runs parameterized SQL against the async engine. Statements are written with
positional ``?`` placeholders; values always travel as bound parameters and
are never formatted into the SQL text.
"""

import itertools
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from core.exceptions import ConflictError, StoreError
from .engine import get_engine

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\?")


@dataclass
class QueryResult:
    """
    Rows as plain dicts (empty list when nothing matched).

    ``last_insert_id`` is only set for ``INSERT ... RETURNING id``; asyncpg
    has no cursor lastrowid.
    """
    rows: List[Dict[str, Any]] = field(default_factory=list)
    last_insert_id: Optional[int] = None


def bind_positional(sql: str, args: Sequence[Any]) -> tuple[str, Dict[str, Any]]:
    """
    Rewrite ``?`` placeholders as named binds ``:p0, :p1, ...``.

    Raises:
        ValueError: if the number of placeholders and arguments differ
    """
    counter = itertools.count()
    bound_sql = _PLACEHOLDER.sub(lambda _: f":p{next(counter)}", sql)
    placeholders = next(counter)
    if placeholders != len(args):
        raise ValueError(f"SQL expects {placeholders} arguments, got {len(args)}")
    return bound_sql, {f"p{index}": value for index, value in enumerate(args)}


class DataStoreGateway:
    """Executes statements on the shared engine, one transaction per call."""

    def __init__(self, engine: Optional[AsyncEngine] = None):
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        return self._engine or get_engine()

    async def execute(self, sql: str, args: Sequence[Any] = ()) -> QueryResult:
        """
        Execute one statement and commit.

        Raises:
            ConflictError: a unique/integrity constraint rejected the write
            StoreError: any other database failure
        """
        bound_sql, params = bind_positional(sql, args)

        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(text(bound_sql), params)

                if not result.returns_rows:
                    return QueryResult()

                rows = [dict(row) for row in result.mappings().all()]
                last_insert_id = rows[0].get("id") if rows and _is_insert(sql) else None
                return QueryResult(rows=rows, last_insert_id=last_insert_id)

        except IntegrityError as exc:
            logger.warning(f"Constraint violation: {exc.orig}")
            raise ConflictError("Violação de restrição no banco de dados.", detail=str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            logger.error(f"Database error executing statement: {exc}")
            raise StoreError("Erro ao acessar o banco de dados.", detail=str(exc)) from exc


def _is_insert(sql: str) -> bool:
    return sql.lstrip().upper().startswith("INSERT")
