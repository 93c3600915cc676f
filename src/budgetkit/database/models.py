"""SQLAlchemy models for the budgetkit workbook."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class CategoryEntry(Base):
    """One category/type row of a settings table."""

    __tablename__ = "settings_categories"

    id = Column(Integer, primary_key=True)
    table_name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False, default="")
    category_type = Column(String, nullable=False, default="")


class CategoryListItem(Base):
    """Published, deduplicated category list (dropdown source)."""

    __tablename__ = "category_list"

    id = Column(Integer, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)


class LedgerRow(Base):
    """Ledger row holding a debit side and a credit side."""

    __tablename__ = "ledger_rows"

    id = Column(Integer, primary_key=True)

    debit_date = Column(Date, nullable=True)
    debit_description = Column(String, nullable=False, default="")
    debit_amount = Column(Numeric(12, 2), nullable=False, default=0)
    debit_category = Column(String, nullable=False, default="")
    debit_type = Column(String, nullable=False, default="")

    credit_date = Column(Date, nullable=True)
    credit_description = Column(String, nullable=False, default="")
    credit_amount = Column(Numeric(12, 2), nullable=False, default=0)
    credit_category = Column(String, nullable=False, default="")
    credit_type = Column(String, nullable=False, default="")

    balance = Column(Numeric(12, 2), nullable=True)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Property(Base):
    """Key-value property."""

    __tablename__ = "properties"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
