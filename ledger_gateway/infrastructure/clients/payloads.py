"""Pydantic schemas for ERP API response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ledger_gateway.domain.exceptions import ValidationError
from ledger_gateway.domain.models import (
    TRANSACTION_STATUSES,
    TRANSACTION_TYPES,
    BnplLimit,
    Party,
    TallySyncLog,
    Transaction,
    ZERO,
)
from ledger_gateway.utils.date_utils import parse_api_date

TransactionType = Literal[TRANSACTION_TYPES]
TransactionStatus = Literal[TRANSACTION_STATUSES]


class ApiPayload(BaseModel):
    """ERP API records use camelCase keys; unknown keys are ignored"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _api_date(value: Any) -> Optional[date]:
    try:
        return parse_api_date(value)
    except ValidationError as e:
        raise ValueError(str(e)) from e


class TransactionPayload(ApiPayload):
    """Item of GET /api/transactions"""

    id: int
    transaction_number: str
    transaction_type: TransactionType
    party_id: Optional[int] = None
    amount: Decimal = Field(..., ge=0)
    balance_due: Optional[Decimal] = None
    transaction_date: Optional[date] = None
    due_date: Optional[date] = None
    status: TransactionStatus
    is_bnpl: bool = False
    is_sync: bool = False
    reference: Optional[str] = None

    @field_validator("transaction_date", "due_date", mode="before")
    @classmethod
    def parse_dates(cls, value: Any) -> Optional[date]:
        return _api_date(value)

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            transaction_number=self.transaction_number,
            transaction_type=self.transaction_type,
            party_id=self.party_id,
            amount=self.amount,
            balance_due=self.balance_due,
            transaction_date=self.transaction_date,
            due_date=self.due_date,
            status=self.status,
            is_bnpl=self.is_bnpl,
            is_synced=self.is_sync,
            reference=self.reference,
        )


class PartyPayload(ApiPayload):
    """Item of GET /api/parties"""

    id: int
    name: str
    type: Literal["customer", "vendor", "both"]
    gstin: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    credit_limit: Optional[Decimal] = None
    credit_period: Optional[int] = None

    def to_domain(self) -> Party:
        return Party(
            id=self.id,
            name=self.name,
            type=self.type,
            gstin=self.gstin,
            contact_person=self.contact_person,
            email=self.email,
            phone=self.phone,
            city=self.city,
            state=self.state,
            credit_limit=self.credit_limit if self.credit_limit is not None else ZERO,
            credit_period=self.credit_period or 0,
        )


class BnplLimitPayload(ApiPayload):
    """Item of GET /api/bnpl-limits"""

    id: int
    party_id: int
    limit_type: Literal["purchase", "sales"]
    total_limit: Decimal = Field(..., ge=0)
    used_limit: Optional[Decimal] = Field(None, ge=0)
    expiry_date: Optional[date] = None

    @field_validator("expiry_date", mode="before")
    @classmethod
    def parse_expiry(cls, value: Any) -> Optional[date]:
        return _api_date(value)

    def to_domain(self) -> BnplLimit:
        return BnplLimit(
            id=self.id,
            party_id=self.party_id,
            limit_type=self.limit_type,
            total_limit=self.total_limit,
            used_limit=self.used_limit if self.used_limit is not None else ZERO,
            expiry_date=self.expiry_date,
        )


class TallySyncLogPayload(ApiPayload):
    """Response of GET /api/tally-sync/latest and POST /api/tally-sync"""

    id: int
    sync_type: Literal["push", "pull"]
    sync_status: Literal["success", "failed"]
    transaction_count: Optional[int] = None
    details: Optional[str] = None
    synced_at: Optional[datetime] = None

    def to_domain(self) -> TallySyncLog:
        return TallySyncLog(
            id=self.id,
            sync_type=self.sync_type,
            sync_status=self.sync_status,
            transaction_count=self.transaction_count,
            details=self.details,
            synced_at=self.synced_at,
        )


P = TypeVar("P", bound=ApiPayload)


def parse_one(schema: Type[P], data: Any) -> P:
    """
    Validate a single record.

    Raises:
        ValidationError: Payload does not match the schema
    """
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Malformed {schema.__name__}: {e}") from e


def parse_many(schema: Type[P], data: Any) -> List[P]:
    """
    Validate a JSON array of records.

    Raises:
        ValidationError: Not a list, or any item does not match the schema
    """
    try:
        return TypeAdapter(List[schema]).validate_python(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Malformed {schema.__name__} list: {e}") from e
