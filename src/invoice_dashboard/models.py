"""Pydantic models for invoice records and the views derived from them.

`InvoiceRecord` is the typed form of one source row. Source rows use the
CSV headers as keys (``"Client Name"``, ``"Date Invoiced"``...), so every
field carries the header as its alias; the Python field name is accepted too.
"""

from __future__ import annotations

from datetime import date
from pydantic import BaseModel, ConfigDict, Field, computed_field

CLIENT_NAME = "Client Name"
DATE_INVOICED = "Date Invoiced"
DATE_PAID = "Date Paid"
INVOICE_AMOUNT = "Invoice Amount"
PAID_AMOUNT = "Paid Amount"
INVOICE_REFERENCE = "Invoice Reference"

SOURCE_FIELDS = (
    CLIENT_NAME,
    DATE_INVOICED,
    DATE_PAID,
    INVOICE_AMOUNT,
    PAID_AMOUNT,
    INVOICE_REFERENCE,
)


class InvoiceRecord(BaseModel):
    """Schema for a single invoice after coercion of the raw source row.

    Attributes:
        client_name: Company the invoice was issued to (grouping key).
        invoice_date: Issue date, or None when missing/unparseable.
        paid_date: Payment date, or None when missing/unparseable.
        invoice_amount: Amount invoiced (0.0 when missing).
        paid_amount: Amount paid (0.0 when missing).
        invoice_reference: Opaque invoice identifier, display only.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    client_name: str = Field("", alias=CLIENT_NAME)
    invoice_date: date | None = Field(None, alias=DATE_INVOICED)
    paid_date: date | None = Field(None, alias=DATE_PAID)
    invoice_amount: float = Field(0.0, alias=INVOICE_AMOUNT)
    paid_amount: float = Field(0.0, alias=PAID_AMOUNT)
    invoice_reference: str = Field("", alias=INVOICE_REFERENCE)


class DerivedInvoice(InvoiceRecord):
    """An `InvoiceRecord` annotated with the number of days it took to pay."""
    days_to_pay: int | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_fully_paid(self) -> bool:
        return self.invoice_amount == self.paid_amount


class MonthlyTotal(BaseModel):
    """Invoiced and paid sums for one invoice month."""
    model_config = ConfigDict(frozen=True)
    month: str
    invoice_amount_sum: float = 0.0
    paid_amount_sum: float = 0.0


class MonthlyAverageDays(BaseModel):
    """Average days to pay for invoices issued in one month."""
    model_config = ConfigDict(frozen=True)
    month: str
    avg_days: float


class CompanyReport(BaseModel):
    """Every derived view for one selected company.

    Attributes:
        company: Selected company ("" when nothing is selected).
        threshold_days: Threshold used for `late_invoices`.
        invoices: The company's invoices with `days_to_pay` attached.
        average_days_to_pay: Mean days to pay, or None when nothing was paid.
        monthly_totals: Sums per invoice month, first-occurrence order.
        monthly_average_days: Mean days to pay per invoice month.
        late_invoices: Invoices paid after more than `threshold_days`.
    """
    model_config = ConfigDict(frozen=True)
    company: str
    threshold_days: int = Field(..., ge=0)
    invoices: list[DerivedInvoice] = Field(default_factory=list)
    average_days_to_pay: float | None = None
    monthly_totals: list[MonthlyTotal] = Field(default_factory=list)
    monthly_average_days: list[MonthlyAverageDays] = Field(default_factory=list)
    late_invoices: list[DerivedInvoice] = Field(default_factory=list)
