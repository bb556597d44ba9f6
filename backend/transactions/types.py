# transactions/types.py
"""
Value types used while building ledger transactions.

These dataclasses are the contract between the amount computation, the
commands and the double-entry writer:

- Fees: Fees charged for a payout, in host currency
- FxRateSource: Where the expense -> host FX rate comes from
- FxRates / CurrencyAmounts / ExpenseAmounts: Output of the amount computation
- TaxInfo / TransactionData: The `data` payload stored on a transaction
- TransactionRecord: A transaction row before it is written

All amounts are integers in minor units; FX rates are Decimals.
"""

from dataclasses import dataclass, field, fields as dataclass_fields, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from transactions.exceptions import InvalidArgument
from transactions.rounding import round_half_up, to_decimal


AUTO_FX_RATE = "auto"


# =============================================================================
# Inputs
# =============================================================================

@dataclass(frozen=True)
class Fees:
    """Fees for one payout, all in host currency and non-negative."""
    payment_processor_fee_in_host_currency: int = 0
    host_fee_in_host_currency: int = 0
    platform_fee_in_host_currency: int = 0

    def __post_init__(self):
        for f in dataclass_fields(self):
            if getattr(self, f.name) < 0:
                raise InvalidArgument(f"{f.name} must not be negative, got {getattr(self, f.name)}")

    @classmethod
    def coerce(cls, fees) -> "Fees":
        """Accept a Fees, None, or a mapping with any subset of the fee keys."""
        if fees is None:
            return cls()
        if isinstance(fees, cls):
            return fees
        known = {f.name for f in dataclass_fields(cls)}
        unknown = set(fees) - known
        if unknown:
            raise InvalidArgument(f"Unknown fee fields: {', '.join(sorted(unknown))}")
        return cls(**{key: value or 0 for key, value in fees.items()})


@dataclass(frozen=True)
class FxRateSource:
    """
    Either an explicit expense -> host rate, or a live lookup at payment time.

    Usage:
        FxRateSource.explicit(Decimal("1.1"))
        FxRateSource.live()
        FxRateSource.coerce("auto")
    """
    rate: Optional[Decimal] = None

    @classmethod
    def explicit(cls, rate) -> "FxRateSource":
        try:
            rate = to_decimal(rate)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise InvalidArgument(f"FX rate must be a number, got {rate!r}") from e
        if not rate.is_finite() or rate <= 0:
            raise InvalidArgument(f"FX rate must be positive, got {rate}")
        return cls(rate=rate)

    @classmethod
    def live(cls) -> "FxRateSource":
        return cls(rate=None)

    @classmethod
    def coerce(cls, value) -> "FxRateSource":
        if isinstance(value, cls):
            return value
        if value == AUTO_FX_RATE:
            return cls.live()
        return cls.explicit(value)

    @property
    def is_live(self) -> bool:
        return self.rate is None


# =============================================================================
# Amount computation results
# =============================================================================

@dataclass(frozen=True)
class FxRates:
    expense_to_host: Decimal
    collective_to_host: Decimal
    expense_to_collective: Decimal


@dataclass(frozen=True)
class CurrencyAmounts:
    """One amount expressed in the three currencies involved in an expense."""
    in_host_currency: int
    in_collective_currency: int
    in_expense_currency: int


@dataclass(frozen=True)
class ExpenseAmounts:
    fx_rates: FxRates
    amount: CurrencyAmounts
    payment_processor_fee: CurrencyAmounts
    host_fee: CurrencyAmounts
    platform_fee: CurrencyAmounts


# =============================================================================
# Transaction data payload
# =============================================================================

@dataclass(frozen=True)
class TaxInfo:
    """
    The first tax line of an expense, as stored on its transaction.

    `fields` keeps every key of the original tax line so that extra
    metadata (e.g. a tax id number) survives into the ledger.
    """
    type: str
    rate: Decimal
    percentage: int
    fields: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_tax_line(cls, tax_line: Mapping[str, Any]) -> "TaxInfo":
        rate = to_decimal(tax_line.get("rate") or 0)
        return cls(
            type=tax_line.get("type"),
            rate=round_half_up(rate, 4),
            percentage=round_half_up(rate * 100),
            fields=dict(tax_line),
        )

    @property
    def id(self) -> str:
        return self.type

    def to_dict(self) -> dict:
        return {
            **self.fields,
            "id": self.id,
            "rate": float(self.rate),
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class TransactionData:
    """
    The `data` payload of an expense transaction.

    `extra` holds caller-supplied metadata. Computed keys take precedence
    over `extra`, except `is_manual`, which callers may override.
    """
    expense_to_host_fx_rate: Optional[Decimal] = None
    tax: Optional[TaxInfo] = None
    fees_payer: Optional[str] = None
    is_manual: bool = False
    extra: Mapping[str, Any] = field(default_factory=dict)

    def with_fees_payer(self, fees_payer: str) -> "TransactionData":
        return replace(self, fees_payer=fees_payer)

    def to_dict(self) -> dict:
        result: Dict[str, Any] = {}
        if self.is_manual:
            result["is_manual"] = True
        result.update(self.extra or {})
        if self.fees_payer:
            result["fees_payer"] = self.fees_payer
        if self.expense_to_host_fx_rate is not None:
            result["expense_to_host_fx_rate"] = str(self.expense_to_host_fx_rate)
        if self.tax is not None:
            result["tax"] = self.tax.to_dict()
        return result


# =============================================================================
# Transaction record
# =============================================================================

@dataclass(frozen=True)
class TransactionRecord:
    """
    A transaction row ready for `Transaction.objects.create_double_entry`.

    Outflows (the gross debit amount and every fee) are negative.
    `amount` and `net_amount_in_collective_currency` are in `currency`,
    which is always the collective's currency.
    """
    type: str
    kind: str
    amount: int
    currency: str
    amount_in_host_currency: int
    host_currency: str
    host_currency_fx_rate: Decimal
    net_amount_in_collective_currency: int
    payment_processor_fee_in_host_currency: int = 0
    host_fee_in_host_currency: int = 0
    platform_fee_in_host_currency: int = 0
    tax_amount: Optional[int] = None
    description: str = ""
    collective_id: Optional[int] = None
    from_collective_id: Optional[int] = None
    host_id: Optional[int] = None
    expense_id: Optional[int] = None
    order_id: Optional[int] = None
    payout_method_id: Optional[int] = None
    payment_method_id: Optional[int] = None
    created_by_user_id: Optional[int] = None
    data: TransactionData = field(default_factory=TransactionData)

    def to_model_kwargs(self) -> dict:
        kwargs = {f.name: getattr(self, f.name) for f in dataclass_fields(self)}
        kwargs["data"] = self.data.to_dict()
        return kwargs
