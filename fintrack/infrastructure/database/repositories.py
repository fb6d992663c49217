"""Data access layer for the finance registries"""

from datetime import date
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
from fintrack.infrastructure.database.models import (
    AssetRecord,
    BudgetRecord,
    DebtRecord,
    GoalRecord,
    TransactionRecord,
)
from fintrack.domain.exceptions import InvalidRecordError, RecordNotFoundError
from fintrack.domain.models import Asset, Budget, Debt, Goal, Transaction
from fintrack.utils.date_utils import month_of


class _Registry:
    """Shared lookup/delete/replace plumbing; subclasses set model, kind and to_domain"""

    model: Any = None
    kind: str = "Record"

    def __init__(self, db: Session):
        self.db = db

    def to_domain(self, record):
        raise NotImplementedError

    def _get_record(self, record_id: str):
        record = self.db.get(self.model, record_id)
        if record is None:
            raise RecordNotFoundError(self.kind, record_id)
        return record

    def _query(self):
        return self.db.query(self.model)

    def get(self, record_id: str):
        return self.to_domain(self._get_record(record_id))

    def list_all(self) -> list:
        return [self.to_domain(r) for r in self._query().all()]

    def create(self, fields: Dict[str, Any]):
        record = self.model(**fields)
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        return self.to_domain(record)

    def update(self, record_id: str, fields: Dict[str, Any]):
        """Full-record replacement; the id is kept"""
        record = self._get_record(record_id)
        for key, value in fields.items():
            if key != "id":
                setattr(record, key, value)
        self.db.flush()
        return self.to_domain(record)

    def delete(self, record_id: str) -> None:
        self.db.delete(self._get_record(record_id))
        self.db.flush()

    def _unique_ids(self, items: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Materialize a replacement set, rejecting ids supplied more than once"""
        items = list(items)
        seen, duplicates = set(), set()
        for fields in items:
            record_id = fields.get("id")
            if record_id is None:
                continue
            if record_id in seen:
                duplicates.add(record_id)
            seen.add(record_id)

        if duplicates:
            raise InvalidRecordError(f"Duplicate {self.kind} ids: {', '.join(sorted(duplicates))}")
        return items

    def replace_all(self, items: Iterable[Dict[str, Any]]) -> list:
        """Drop every record and load the given ones (ids kept when supplied)"""
        items = self._unique_ids(items)
        self.db.query(self.model).delete()
        records = []
        for fields in items:
            fields = {k: v for k, v in fields.items() if not (k == "id" and v is None)}
            record = self.model(**fields)
            self.db.add(record)
            records.append(record)
        self.db.flush()
        return [self.to_domain(r) for r in records]

    def count(self) -> int:
        return self._query().count()


class TransactionRepository(_Registry):
    """Transaction ledger; snapshots are ordered by date, newest first"""

    model = TransactionRecord
    kind = "Transaction"

    def to_domain(self, record: TransactionRecord) -> Transaction:
        return Transaction(
            id=record.id,
            date=record.date,
            description=record.description,
            amount=record.amount,
            type=record.type,
            category=record.category,
        )

    def _query(self):
        return self.db.query(TransactionRecord).order_by(
            TransactionRecord.date.desc(), TransactionRecord.created_at.desc()
        )

    def replace_all(self, items: Iterable[Dict[str, Any]]) -> List[Transaction]:
        items = self._unique_ids(items)
        self.db.query(TransactionRecord).delete()
        return self.add_batch(items)

    def add_batch(self, items: Iterable[Dict[str, Any]]) -> List[Transaction]:
        """Append several transactions at once; ids are generated when absent"""
        records = []
        for fields in items:
            fields = {k: v for k, v in fields.items() if not (k == "id" and v is None)}
            record = TransactionRecord(**fields)
            self.db.add(record)
            records.append(record)
        self.db.flush()
        created = [self.to_domain(r) for r in records]
        return sorted(created, key=lambda t: t.date, reverse=True)

    def list_between(self, start: date, end: date) -> List[Transaction]:
        rows = (
            self._query()
            .filter(TransactionRecord.date >= start, TransactionRecord.date <= end)
            .all()
        )
        return [self.to_domain(r) for r in rows]

    def list_by_month(self, year: int, month: int) -> List[Transaction]:
        start, end = month_of(year, month)
        return self.list_between(start, end)


class BudgetRepository(_Registry):
    model = BudgetRecord
    kind = "Budget"

    def to_domain(self, record: BudgetRecord) -> Budget:
        return Budget(
            id=record.id,
            name=record.name,
            amount=record.amount,
            category=record.category,
            period=record.period,
            custom_period_details=record.custom_period_details,
        )

    def _query(self):
        return self.db.query(BudgetRecord).order_by(BudgetRecord.created_at, BudgetRecord.name)


class AssetRepository(_Registry):
    """Assets get last_updated stamped on every create and update"""

    model = AssetRecord
    kind = "Asset"

    def __init__(self, db: Session, today: Optional[date] = None):
        super().__init__(db)
        self.today = today

    def to_domain(self, record: AssetRecord) -> Asset:
        return Asset(
            id=record.id,
            name=record.name,
            type=record.type,
            value=record.value,
            last_updated=record.last_updated,
        )

    def _stamp(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return {**fields, "last_updated": self.today or date.today()}

    def create(self, fields: Dict[str, Any]) -> Asset:
        return super().create(self._stamp(fields))

    def update(self, record_id: str, fields: Dict[str, Any]) -> Asset:
        return super().update(record_id, self._stamp(fields))


class DebtRepository(_Registry):
    model = DebtRecord
    kind = "Debt"

    def to_domain(self, record: DebtRecord) -> Debt:
        return Debt(
            id=record.id,
            name=record.name,
            total_amount=record.total_amount,
            amount_paid=record.amount_paid,
            interest_rate=record.interest_rate,
            minimum_payment=record.minimum_payment,
        )

    def save(self, debt: Debt) -> Debt:
        record = self._get_record(debt.id)
        record.amount_paid = debt.amount_paid
        self.db.flush()
        return self.to_domain(record)


class GoalRepository(_Registry):
    model = GoalRecord
    kind = "Goal"

    def to_domain(self, record: GoalRecord) -> Goal:
        return Goal(
            id=record.id,
            name=record.name,
            target_amount=record.target_amount,
            current_amount=record.current_amount,
            target_date=record.target_date,
            icon=record.icon,
        )

    def save(self, goal: Goal) -> Goal:
        record = self._get_record(goal.id)
        record.current_amount = goal.current_amount
        self.db.flush()
        return self.to_domain(record)
