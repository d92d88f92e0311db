"""Repository interface and its asyncpg implementation.

Each record type gets one repository. Handlers receive them through the
``Repositories`` bundle rather than reaching for module-level state, so the
storage behind them can be swapped (tests use in-memory ones).

Filter semantics shared by every implementation:

* ``column=value`` matches equal values;
* a list/tuple/set value on a scalar column matches any of its members;
* a scalar value on an array column matches arrays containing it.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Protocol, Sequence, Tuple, Type, TypeVar
from uuid import UUID

import asyncpg
from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class Repository(Protocol[ModelT]):
    async def find_by_id(self, record_id: UUID) -> Optional[ModelT]:
        ...

    async def find_all_sorted(self) -> List[ModelT]:
        ...

    async def find_by_filter(self, **criteria: Any) -> List[ModelT]:
        ...

    async def find_one(self, **criteria: Any) -> Optional[ModelT]:
        ...

    async def count(self, **criteria: Any) -> int:
        ...

    async def save(self, record: ModelT) -> ModelT:
        ...

    async def replace(self, record: ModelT) -> Optional[ModelT]:
        ...

    async def delete_by_id(self, record_id: UUID) -> None:
        ...


class PgRepository(Generic[ModelT]):
    """Table-backed repository using the shared asyncpg pool."""

    table: str
    model: Type[ModelT]
    columns: Tuple[str, ...]
    array_columns: Tuple[str, ...] = ()
    order_by: Tuple[str, ...] = ("id",)

    def __init__(self, pool: asyncpg.pool.Pool):
        self.pool = pool

    def _to_model(self, row: Optional[asyncpg.Record]) -> Optional[ModelT]:
        if row is None:
            return None
        return self.model.model_validate(dict(row))

    def _to_row(self, record: ModelT) -> Dict[str, Any]:
        data = record.model_dump(mode="python")
        row = {"id": data["id"]}
        for column in self.columns:
            value = data[column]
            if isinstance(value, Enum):
                value = value.value
            row[column] = value
        return row

    def _where(self, criteria: Dict[str, Any]) -> Tuple[str, List[Any]]:
        clauses = []
        params: List[Any] = []
        for column, value in criteria.items():
            if column != "id" and column not in self.columns:
                raise ValueError(f"Unknown column for {self.table}: {column}")
            if isinstance(value, Enum):
                value = value.value
            params.append(value)
            placeholder = f"${len(params)}"
            if column in self.array_columns:
                clauses.append(f"{placeholder} = ANY({column})")
            elif isinstance(value, (list, tuple, set, frozenset)):
                params[-1] = list(value)
                clauses.append(f"{column} = ANY({placeholder})")
            else:
                clauses.append(f"{column} = {placeholder}")
        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    @property
    def _order(self) -> str:
        return " ORDER BY " + ", ".join(self.order_by)

    async def find_by_id(self, record_id: UUID) -> Optional[ModelT]:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(f"SELECT * FROM {self.table} WHERE id=$1", record_id)
        return self._to_model(row)

    async def find_all_sorted(self) -> List[ModelT]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(f"SELECT * FROM {self.table}{self._order}")
        return [self._to_model(row) for row in rows]

    async def find_by_filter(self, **criteria: Any) -> List[ModelT]:
        where, params = self._where(criteria)
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(f"SELECT * FROM {self.table}{where}{self._order}", *params)
        return [self._to_model(row) for row in rows]

    async def find_one(self, **criteria: Any) -> Optional[ModelT]:
        where, params = self._where(criteria)
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT * FROM {self.table}{where}{self._order} LIMIT 1", *params
            )
        return self._to_model(row)

    async def count(self, **criteria: Any) -> int:
        where, params = self._where(criteria)
        async with self.pool.acquire() as conn:
            return await conn.fetchval(f"SELECT COUNT(*) FROM {self.table}{where}", *params)

    async def save(self, record: ModelT) -> ModelT:
        """Insert the record, or overwrite the row with the same id."""
        row = self._to_row(record)
        names = list(row)
        placeholders = ", ".join(f"${index}" for index in range(1, len(names) + 1))
        updates = ", ".join(f"{name} = EXCLUDED.{name}" for name in names if name != "id")
        async with self.pool.acquire() as conn:
            saved = await conn.fetchrow(
                f"""
                INSERT INTO {self.table} ({", ".join(names)})
                VALUES ({placeholders})
                ON CONFLICT (id) DO UPDATE SET {updates}
                RETURNING *
                """,
                *row.values(),
            )
        return self._to_model(saved)

    async def replace(self, record: ModelT) -> Optional[ModelT]:
        """Overwrite an existing row in place. Returns None if it is gone."""
        row = self._to_row(record)
        record_id = row.pop("id")
        assignments = ", ".join(f"{name} = ${index}" for index, name in enumerate(row, start=2))
        async with self.pool.acquire() as conn:
            updated = await conn.fetchrow(
                f"UPDATE {self.table} SET {assignments} WHERE id = $1 RETURNING *",
                record_id,
                *row.values(),
            )
        return self._to_model(updated)

    async def delete_by_id(self, record_id: UUID) -> None:
        async with self.pool.acquire() as conn:
            await conn.execute(f"DELETE FROM {self.table} WHERE id=$1", record_id)


@dataclass(frozen=True)
class Repositories:
    """One repository per record type, injected into every handler."""
    authors: Repository
    genres: Repository
    books: Repository
    instances: Repository


def index_by_id(records: Sequence[BaseModel]) -> Dict[UUID, Any]:
    return {record.id: record for record in records}
