"""In-memory repositories with the same filter semantics as the SQL ones."""
from typing import Any, Callable, Dict, Iterable, List, Optional
from uuid import UUID

from pydantic import BaseModel

from locallibrary.services.repository import Repositories


class InMemoryRepository:
    def __init__(self, sort_key: Callable[[Any], Any], array_fields: Iterable[str] = ()):
        self.records: Dict[UUID, BaseModel] = {}
        self.sort_key = sort_key
        self.array_fields = set(array_fields)

    def _matches(self, record: BaseModel, criteria: Dict[str, Any]) -> bool:
        for name, wanted in criteria.items():
            value = getattr(record, name)
            if name in self.array_fields:
                if wanted not in value:
                    return False
            elif isinstance(wanted, (list, tuple, set, frozenset)):
                if value not in wanted:
                    return False
            elif value != wanted:
                return False
        return True

    async def find_by_id(self, record_id: UUID) -> Optional[BaseModel]:
        return self.records.get(record_id)

    async def find_all_sorted(self) -> List[BaseModel]:
        return sorted(self.records.values(), key=self.sort_key)

    async def find_by_filter(self, **criteria: Any) -> List[BaseModel]:
        return [record for record in await self.find_all_sorted() if self._matches(record, criteria)]

    async def find_one(self, **criteria: Any) -> Optional[BaseModel]:
        found = await self.find_by_filter(**criteria)
        return found[0] if found else None

    async def count(self, **criteria: Any) -> int:
        return len(await self.find_by_filter(**criteria))

    async def save(self, record: BaseModel) -> BaseModel:
        self.records[record.id] = record
        return record

    async def replace(self, record: BaseModel) -> Optional[BaseModel]:
        if record.id not in self.records:
            return None
        self.records[record.id] = record
        return record

    async def delete_by_id(self, record_id: UUID) -> None:
        self.records.pop(record_id, None)


class BrokenRepository(InMemoryRepository):
    """Fails every read, like a repository whose database went away."""

    async def find_by_id(self, record_id):
        raise ConnectionError("database unavailable")

    async def find_all_sorted(self):
        raise ConnectionError("database unavailable")

    async def count(self, **criteria):
        raise ConnectionError("database unavailable")


def make_repositories(broken: bool = False) -> Repositories:
    repo = BrokenRepository if broken else InMemoryRepository
    return Repositories(
        authors=repo(lambda author: (author.family_name, author.first_name)),
        genres=repo(lambda genre: genre.name),
        books=repo(lambda book: book.title, array_fields=("genre_ids",)),
        instances=repo(lambda instance: instance.imprint),
    )
