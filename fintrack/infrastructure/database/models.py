"""SQLAlchemy ORM models for the finance registries"""

import uuid
from sqlalchemy import Column, String, Float, DateTime, Date, Numeric, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def new_id() -> str:
    return uuid.uuid4().hex


class TransactionRecord(Base):
    """Ledger entry; amount is always non-negative"""

    __tablename__ = "ledger_transaction"

    id = Column(String(64), primary_key=True, default=new_id)
    date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    amount = Column(Numeric(14, 2), nullable=False)
    type = Column(String(16), nullable=False)  # income | expense
    category = Column(Text, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class BudgetRecord(Base):
    """Budget with recurring or manual period"""

    __tablename__ = "budget"

    id = Column(String(64), primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    category = Column(Text, nullable=False)
    period = Column(String(16), nullable=False)  # monthly | weekly | bi-weekly | custom
    custom_period_details = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class AssetRecord(Base):
    __tablename__ = "asset"

    id = Column(String(64), primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    type = Column(String(16), nullable=False)
    value = Column(Numeric(16, 2), nullable=False)
    last_updated = Column(Date, nullable=False)


class DebtRecord(Base):
    __tablename__ = "debt"

    id = Column(String(64), primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    total_amount = Column(Numeric(14, 2), nullable=False)
    amount_paid = Column(Numeric(14, 2), nullable=False, default=0)
    interest_rate = Column(Float, nullable=True)
    minimum_payment = Column(Numeric(14, 2), nullable=True)


class GoalRecord(Base):
    __tablename__ = "goal"

    id = Column(String(64), primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    target_amount = Column(Numeric(14, 2), nullable=False)
    current_amount = Column(Numeric(14, 2), nullable=False, default=0)
    target_date = Column(Date, nullable=True)
    icon = Column(Text, nullable=True)
