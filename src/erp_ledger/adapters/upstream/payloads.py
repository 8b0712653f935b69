"""Boundary models for the ERP backend's record shapes.

The backend names the same field differently per endpoint and per release
(``purchase_orders_total_amount`` vs ``total_amount``, ``returns_total`` vs
``returns_total_amount`` and so on). These models accept every known variant,
coerce numbers leniently and hand the engine its normalized shapes, so the
ledger and proration code never see raw field names.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Self

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from erp_ledger.core.errors import UpstreamRecordError
from erp_ledger.core.numbers import to_number
from erp_ledger.ledger.entities import LedgerSourceRecord, RecordKind
from erp_ledger.proration.entities import OrderLineItem
from erp_ledger.proration.valuation import ReturnLineInput


def _aliases(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class UpstreamModel(BaseModel):
    """Shared base: ignore unknown fields, parse with a contract check."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    @classmethod
    def parse(cls, data: Any) -> Self:
        if not isinstance(data, Mapping):
            raise UpstreamRecordError(
                f"{cls.__name__} expects a mapping, got {type(data).__name__}"
            )
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise UpstreamRecordError(f"Invalid {cls.__name__}: {e}") from e

    @classmethod
    def parse_many(cls, items: Any) -> list[Self]:
        if items is None:
            return []
        if not isinstance(items, list | tuple):
            raise UpstreamRecordError(
                f"{cls.__name__} list expected, got {type(items).__name__}"
            )
        return [cls.parse(item) for item in items]


class LedgerRecordPayload(UpstreamModel):
    """Common shape of orders, returns and payments."""

    kind: ClassVar[RecordKind]

    id: str | int | None = None
    date: Any = None
    status: str | None = None
    amount: float = 0.0
    counterparty_id: str | int | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return to_number(value)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value).strip()

    def belongs_to(self, counterparty_id: str | int | None) -> bool:
        """Loose id comparison; ``"7"`` and ``7`` name the same party."""
        if counterparty_id is None:
            return True
        return str(self.counterparty_id) == str(counterparty_id)

    def to_record(self) -> LedgerSourceRecord:
        return LedgerSourceRecord(
            kind=self.kind,
            id=self.id,
            date=self.date,
            status=self.status,
            amount=self.amount,
        )


class PurchaseOrderPayload(LedgerRecordPayload):
    kind: ClassVar[RecordKind] = RecordKind.ORDER

    id: str | int | None = Field(
        default=None, validation_alias=_aliases("purchase_orders_id", "id")
    )
    date: Any = Field(
        default=None,
        validation_alias=_aliases(
            "purchase_orders_order_date", "order_date", "created_at"
        ),
    )
    status: str | None = Field(
        default=None, validation_alias=_aliases("purchase_orders_status", "status")
    )
    amount: float = Field(
        default=0.0,
        validation_alias=_aliases("purchase_orders_total_amount", "total_amount"),
    )
    counterparty_id: str | int | None = Field(
        default=None,
        validation_alias=_aliases("purchase_orders_supplier_id", "supplier_id"),
    )


class PurchaseReturnPayload(LedgerRecordPayload):
    kind: ClassVar[RecordKind] = RecordKind.RETURN

    id: str | int | None = Field(
        default=None, validation_alias=_aliases("purchase_returns_id", "id")
    )
    date: Any = Field(
        default=None,
        validation_alias=_aliases("purchase_returns_date", "date", "created_at"),
    )
    status: str | None = Field(
        default=None, validation_alias=_aliases("purchase_returns_status", "status")
    )
    amount: float = Field(
        default=0.0,
        validation_alias=_aliases(
            "purchase_returns_total_amount", "purchase_returns_total", "total_amount"
        ),
    )
    counterparty_id: str | int | None = Field(
        default=None,
        validation_alias=_aliases("purchase_returns_supplier_id", "supplier_id"),
    )


class SupplierPaymentPayload(LedgerRecordPayload):
    kind: ClassVar[RecordKind] = RecordKind.PAYMENT

    id: str | int | None = Field(
        default=None, validation_alias=_aliases("supplier_payments_id", "id")
    )
    date: Any = Field(
        default=None,
        validation_alias=_aliases("supplier_payments_date", "date", "created_at"),
    )
    status: str | None = Field(
        default=None, validation_alias=_aliases("supplier_payments_status", "status")
    )
    amount: float = Field(
        default=0.0, validation_alias=_aliases("supplier_payments_amount", "amount")
    )
    counterparty_id: str | int | None = Field(
        default=None,
        validation_alias=_aliases("supplier_payments_supplier_id", "supplier_id"),
    )


class SalesOrderPayload(LedgerRecordPayload):
    kind: ClassVar[RecordKind] = RecordKind.ORDER

    id: str | int | None = Field(
        default=None, validation_alias=_aliases("sales_orders_id", "id")
    )
    date: Any = Field(
        default=None,
        validation_alias=_aliases(
            "sales_orders_order_date", "sales_orders_date", "order_date", "created_at"
        ),
    )
    status: str | None = Field(
        default=None, validation_alias=_aliases("sales_orders_status", "status")
    )
    amount: float = Field(
        default=0.0,
        validation_alias=_aliases(
            "sales_orders_total_amount", "sales_orders_total", "total_amount"
        ),
    )
    counterparty_id: str | int | None = Field(
        default=None, validation_alias=_aliases("sales_orders_client_id", "client_id")
    )


class SalesReturnPayload(LedgerRecordPayload):
    kind: ClassVar[RecordKind] = RecordKind.RETURN

    id: str | int | None = Field(
        default=None, validation_alias=_aliases("returns_id", "id")
    )
    date: Any = Field(
        default=None,
        validation_alias=_aliases(
            "returns_date", "returns_return_date", "return_date", "date", "created_at"
        ),
    )
    status: str | None = Field(
        default=None, validation_alias=_aliases("returns_status", "status")
    )
    amount: float = Field(
        default=0.0,
        validation_alias=_aliases(
            "returns_total_amount", "returns_total", "total_amount"
        ),
    )
    counterparty_id: str | int | None = Field(
        default=None, validation_alias=_aliases("returns_client_id", "client_id")
    )


class ClientPaymentPayload(LedgerRecordPayload):
    kind: ClassVar[RecordKind] = RecordKind.PAYMENT

    id: str | int | None = Field(
        default=None, validation_alias=_aliases("client_payments_id", "id")
    )
    date: Any = Field(
        default=None,
        validation_alias=_aliases("client_payments_date", "date", "created_at"),
    )
    status: str | None = Field(
        default=None, validation_alias=_aliases("client_payments_status", "status")
    )
    amount: float = Field(
        default=0.0, validation_alias=_aliases("client_payments_amount", "amount")
    )
    counterparty_id: str | int | None = Field(
        default=None,
        validation_alias=_aliases("client_payments_client_id", "client_id"),
    )


_NUMERIC_LINE_FIELDS = (
    "ordered_quantity",
    "returned_quantity",
    "already_returned",
    "unit_price",
    "total_discount",
    "total_tax",
    "tax_rate",
)


class ReturnItemPayload(UpstreamModel):
    """A return line joined with the order line it came from."""

    returned_quantity: float = Field(
        default=0.0, validation_alias=_aliases("return_items_quantity", "quantity")
    )
    unit_price: float = Field(
        default=0.0,
        validation_alias=_aliases(
            "return_items_unit_price",
            "return_items_unit_cost",
            "sales_order_items_unit_price",
            "purchase_order_items_unit_cost",
            "unit_price",
        ),
    )
    ordered_quantity: float = Field(
        default=0.0,
        validation_alias=_aliases(
            "ordered_quantity",
            "sales_order_items_quantity",
            "purchase_order_items_quantity_ordered",
        ),
    )
    already_returned: float = Field(
        default=0.0,
        validation_alias=_aliases(
            "sales_order_items_quantity_returned", "total_returned", "returned_quantity"
        ),
    )
    total_discount: float = Field(
        default=0.0,
        validation_alias=_aliases(
            "return_items_discount_amount",
            "sales_order_items_discount_amount",
            "discount_amount",
        ),
    )
    total_tax: float = Field(
        default=0.0,
        validation_alias=_aliases("sales_order_items_tax_amount", "tax_amount"),
    )
    tax_rate: float = Field(
        default=0.0,
        validation_alias=_aliases(
            "sales_order_items_tax_rate", "return_items_tax_rate", "tax_rate"
        ),
    )
    has_tax: bool = Field(
        default=False,
        validation_alias=_aliases("sales_order_items_has_tax", "has_tax"),
    )
    return_tax_amount: float | None = Field(
        default=None, validation_alias=_aliases("return_items_tax_amount")
    )

    @field_validator(*_NUMERIC_LINE_FIELDS, mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return to_number(value)

    @field_validator("return_tax_amount", mode="before")
    @classmethod
    def _coerce_optional_number(cls, value: Any) -> float | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return to_number(value)

    @field_validator("has_tax", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    def to_line(self) -> OrderLineItem:
        return OrderLineItem(
            ordered_quantity=self.ordered_quantity,
            unit_price=self.unit_price,
            total_discount=self.total_discount,
            total_tax=self.total_tax,
            has_tax=self.has_tax or self.tax_rate > 0,
            tax_rate=self.tax_rate,
        )


class ReturnDocumentPayload(UpstreamModel):
    """A return header with its lines and the linked order's header discount."""

    id: str | int | None = Field(
        default=None,
        validation_alias=_aliases("returns_id", "purchase_returns_id", "id"),
    )
    items: list[ReturnItemPayload] = Field(default_factory=list)
    header_discount: float = Field(
        default=0.0,
        validation_alias=_aliases(
            "sales_orders_discount_amount",
            "sales_order_discount_amount",
            "sales_orders_discount",
            "purchase_orders_order_discount",
            "order_discount",
        ),
    )
    reported_total: float = Field(
        default=0.0,
        validation_alias=_aliases(
            "returns_total_amount",
            "purchase_returns_total_amount",
            "returns_total",
            "total_amount",
        ),
    )

    @field_validator("header_discount", "reported_total", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return to_number(value)

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> list[Any]:
        if value is None:
            return []
        if not isinstance(value, list | tuple):
            raise ValueError("items must be a list")
        return [item for item in value if isinstance(item, Mapping)]

    def to_inputs(self) -> list[ReturnLineInput]:
        return [
            ReturnLineInput(
                line=item.to_line(),
                returned_quantity=item.returned_quantity,
                return_tax_amount=item.return_tax_amount,
                already_returned=item.already_returned,
            )
            for item in self.items
        ]
