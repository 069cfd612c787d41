"""Base repository for single-model lookups using generics."""

from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..schema import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Generic base repository for read access to one ORM model."""

    model_class: ClassVar[type[Any]]

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, entity_id: Any) -> ModelT | None:
        return self.session.get(self.model_class, entity_id)

    def get_by(self, **filters: Any) -> ModelT | None:
        stmt = select(self.model_class).filter_by(**filters).limit(1)
        result = self.session.execute(stmt)
        return result.scalars().first()

    def get_many(self, ids: list[Any]) -> list[ModelT]:
        if not ids:
            return []
        stmt = select(self.model_class).where(self.model_class.id.in_(ids))
        result = self.session.execute(stmt)
        return list(result.scalars().all())

    def list_all(self) -> list[ModelT]:
        result = self.session.execute(select(self.model_class))
        return list(result.scalars().all())

    def count(self) -> int:
        stmt = select(func.count()).select_from(self.model_class)
        return self.session.execute(stmt).scalar_one()
