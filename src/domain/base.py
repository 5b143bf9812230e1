"""Shared base for domain entities"""

import secrets
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import BigInteger, Integer, Numeric, String
from sqlalchemy.types import TypeDecorator
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer(), "sqlite")


class ExactDecimal(TypeDecorator):
    """Decimal stored as plain text

    SQLite has no decimal type and would round NUMERIC values through a float.
    """

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return format(Decimal(value), "f")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


def decimal_type(precision: int, scale: int):
    return Numeric(precision, scale).with_variant(ExactDecimal(), "sqlite")


# Inputs carry at most 6 decimal places (see LineItem and the request schemas).
# Amounts hold quantity * unit_price (12 places) times a rate / 100 (20 places).
RateType = decimal_type(9, 6)
QuantityType = decimal_type(24, 6)
AmountType = decimal_type(38, 20)


class BaseModel(SQLModel):
    pass


def generate_token() -> str:
    return secrets.token_urlsafe(32)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Aware UTC timestamp; naive values read back from the database are UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
