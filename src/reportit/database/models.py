"""SQLAlchemy models for reportit database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Account(Base):
    """Ledger account model."""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    currency_code = Column(String(3), default="USD", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="account")


class Category(Base):
    """Category model with optional parent."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    parent_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    color = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    parent = relationship("Category", remote_side=[id], backref="children")


class Payee(Base):
    """Payee model."""

    __tablename__ = "payees"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Ledger entry model."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    transaction_date = Column(Date, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    currency_code = Column(String(3), nullable=False)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    payee_id = Column(String(36), ForeignKey("payees.id"), nullable=True)
    payee_name = Column(String, nullable=True)
    description = Column(String, nullable=True)
    is_transfer = Column(Boolean, default=False, nullable=False)
    status = Column(String(20), default="UNRECONCILED", nullable=False)
    is_split = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")
    category = relationship("Category")
    payee = relationship("Payee")
    splits = relationship(
        "TransactionSplit",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionSplit.position",
    )


class TransactionSplit(Base):
    """Allocation of a split ledger entry."""

    __tablename__ = "transaction_splits"

    id = Column(String(36), primary_key=True, default=_new_id)
    transaction_id = Column(String(36), ForeignKey("transactions.id"), nullable=False)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    memo = Column(String, nullable=True)
    position = Column(Integer, default=0, nullable=False)

    # Relationships
    transaction = relationship("Transaction", back_populates="splits")
    category = relationship("Category")


class ExchangeRate(Base):
    """Exchange rate model."""

    __tablename__ = "exchange_rates"

    id = Column(Integer, primary_key=True)
    from_currency = Column(String(3), nullable=False)
    to_currency = Column(String(3), nullable=False)
    rate = Column(Numeric(18, 8), nullable=False)
    rate_date = Column(Date, nullable=True)


class UserPreference(Base):
    """Per-user settings."""

    __tablename__ = "user_preferences"

    user_id = Column(String, primary_key=True)
    default_currency = Column(String(3), nullable=True)


class CustomReport(Base):
    """Stored report definition.

    ``filters`` and ``config`` hold the JSON wire format produced by
    the mappers module.
    """

    __tablename__ = "custom_reports"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    view_type = Column(String(20), nullable=False)
    timeframe_type = Column(String(20), nullable=False)
    group_by = Column(String(20), nullable=False)
    filters = Column(JSON, nullable=False, default=dict)
    config = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


SQLITE_LOWER_FUNCTION = "unicode_lower"


def _unicode_lower(value):
    return value.lower() if value is not None else None


def _register_sqlite_functions(dbapi_connection, connection_record):
    # SQLite lower() only folds ASCII letters
    dbapi_connection.create_function(
        SQLITE_LOWER_FUNCTION, 1, _unicode_lower, deterministic=True
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _register_sqlite_functions)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
