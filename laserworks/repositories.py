"""Data access objects: one per table, keyed by the column routes address rows by."""
from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import bindparam, select, text, update
from sqlalchemy.orm import Session

from . import models
from .errors import BadRequestError
from .sql import PartialUpdate, positional_params, positional_to_named

M = TypeVar("M", bound=models.Base)


class Repository(Generic[M]):
    model: Type[M]
    key: str = "id"

    def __init__(self, db: Session):
        self.db = db

    @property
    def _key_column(self):
        return getattr(self.model, self.key)

    def get(self, key: Any) -> Optional[M]:
        return self.db.scalars(select(self.model).where(self._key_column == key)).first()

    def list(self) -> List[M]:
        return list(self.db.scalars(select(self.model).order_by(self.model.id)))

    def insert(self, fields: Dict[str, Any]) -> M:
        row = self.model(**fields)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def update_by_key(self, key: Any, update_: PartialUpdate) -> Optional[M]:
        """Apply a translated partial update to the row identified by ``key``.

        The key is bound at the position right after the update values. Every
        target column must exist on the table; column names are never bound.
        """
        table = self.model.__table__
        for column in update_.columns:
            if column not in table.c:
                raise BadRequestError(f"Unknown field: {column}")
        key_idx = update_.next_index
        sql = f"UPDATE {table.name} SET {update_.set_clause} WHERE {table.c[self.key].name} = ${key_idx}"
        columns = update_.columns + (self.key,)
        stmt = text(positional_to_named(sql)).bindparams(
            *(
                bindparam(f"p{idx}", type_=table.c[column].type)
                for idx, column in enumerate(columns, start=1)
            )
        )
        result = self.db.execute(stmt, positional_params(update_.values + (key,)))
        if result.rowcount == 0:
            self.db.rollback()
            return None
        self.db.commit()
        return self.get(key)

    def set_values(self, key: Any, **values: Any) -> Optional[M]:
        """Single UPDATE statement for fixed state transitions."""
        stmt = update(self.model).where(self._key_column == key).values(**values)
        result = self.db.execute(stmt.execution_options(synchronize_session=False))
        if result.rowcount == 0:
            self.db.rollback()
            return None
        self.db.commit()
        return self.get(key)

    def delete_by_key(self, key: Any) -> Optional[M]:
        row = self.get(key)
        if row is None:
            return None
        self.db.delete(row)
        self.db.commit()
        return row


class UserRepository(Repository[models.User]):
    model = models.User
    key = "username"


class ServiceRepository(Repository[models.Service]):
    model = models.Service


class UserServiceRepository(Repository[models.UserService]):
    model = models.UserService

    def _detail_query(self):
        us, s = models.UserService, models.Service
        return (
            select(
                s.id.label("service_id"),
                s.title,
                s.description,
                s.price,
                s.is_active,
                us.id.label("user_service_id"),
                us.user_id,
                us.confirmed_price,
                us.is_completed,
                us.addition_info,
                us.confirmation_code,
                us.requested_date,
                us.fulfilled_date,
            )
            .join(us, s.id == us.service_id)
            .order_by(us.id)
        )

    def list_for_user(self, user_id: int) -> List[Dict[str, Any]]:
        stmt = self._detail_query().where(models.UserService.user_id == user_id)
        return [dict(row) for row in self.db.execute(stmt).mappings()]

    def list_with_users(self) -> List[Dict[str, Any]]:
        u = models.User
        stmt = self._detail_query().add_columns(u.username, u.first_name).join(u, u.id == models.UserService.user_id)
        return [dict(row) for row in self.db.execute(stmt).mappings()]


class ReviewRepository(Repository[models.Review]):
    model = models.Review

    def _with_author(self):
        r, u = models.Review, models.User
        return (
            select(
                r.id,
                r.user_id,
                u.username,
                u.first_name,
                r.review_text,
                r.rating,
                r.time,
                r.service_id,
            )
            .join(u, r.user_id == u.id)
            .order_by(r.id)
        )

    def get_with_author(self, review_id: int) -> Optional[Dict[str, Any]]:
        row = self.db.execute(self._with_author().where(models.Review.id == review_id)).mappings().first()
        return dict(row) if row is not None else None

    def list_with_authors(self) -> List[Dict[str, Any]]:
        return [dict(row) for row in self.db.execute(self._with_author()).mappings()]

    def list_for_service(self, service_id: int) -> List[Dict[str, Any]]:
        return [dict(row) for row in self.db.execute(self._with_author().where(models.Review.service_id == service_id)).mappings()]
