"""Thin table client over the database.

Handlers talk to the store only through these gateways. Rows come back as
plain dicts, the way a hosted table API returns JSON rows, and every driver
failure surfaces as a single ``GatewayError`` carrying the store's message.
"""
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from flask import current_app
from sqlalchemy import asc, desc
from sqlalchemy.exc import SQLAlchemyError

from models import db, Admin, Category, Product, Order


class GatewayError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


@dataclass
class JoinedRow:
    """A row plus the selected columns of the row it references, if any."""
    row: dict
    joined: Optional[dict] = None


def _plain(value):
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def row_to_dict(obj, columns=None) -> dict:
    names = columns or [c.name for c in obj.__table__.columns]
    return {name: _plain(getattr(obj, name)) for name in names}


class TableGateway:
    def __init__(self, model):
        self.model = model

    @property
    def table(self) -> str:
        return self.model.__tablename__

    @contextmanager
    def _run(self, op):
        try:
            yield
        except (SQLAlchemyError, OverflowError) as e:
            db.session.rollback()
            current_app.logger.exception(f"{op} on {self.table} failed")
            raise GatewayError(str(getattr(e, "orig", None) or e)) from e

    def _ordered(self, query, order_by, ascending):
        if order_by is None:
            return query
        column = getattr(self.model, order_by)
        tiebreak = self.model.id
        if ascending:
            return query.order_by(asc(column), asc(tiebreak))
        return query.order_by(desc(column), desc(tiebreak))

    def select(self, order_by=None, ascending=True, **filters) -> list[dict]:
        with self._run("select"):
            query = self._ordered(self.model.query.filter_by(**filters), order_by, ascending)
            return [row_to_dict(r) for r in query.all()]

    def select_one(self, columns=None, **filters) -> Optional[dict]:
        with self._run("select"):
            row = self.model.query.filter_by(**filters).first()
            return row_to_dict(row, columns) if row is not None else None

    def select_joined(self, other, on: str, columns=("name",),
                      order_by=None, ascending=True) -> list[JoinedRow]:
        """Left-join ``other`` through the reference column ``on``."""
        with self._run("select"):
            query = (
                db.session.query(self.model, other)
                .outerjoin(other, other.id == getattr(self.model, on))
            )
            query = self._ordered(query, order_by, ascending)
            return [
                JoinedRow(
                    row=row_to_dict(row),
                    joined=row_to_dict(ref, list(columns)) if ref is not None else None,
                )
                for row, ref in query.all()
            ]

    def insert(self, values: dict) -> dict:
        with self._run("insert"):
            row = self.model(**values)
            db.session.add(row)
            db.session.commit()
            db.session.refresh(row)
            return row_to_dict(row)

    def update(self, values: dict, **filters) -> int:
        with self._run("update"):
            count = self.model.query.filter_by(**filters).update(
                values, synchronize_session=False
            )
            db.session.commit()
            return count

    def delete(self, **filters) -> int:
        with self._run("delete"):
            count = self.model.query.filter_by(**filters).delete(synchronize_session=False)
            db.session.commit()
            return count


admins = TableGateway(Admin)
categories = TableGateway(Category)
products = TableGateway(Product)
orders = TableGateway(Order)
