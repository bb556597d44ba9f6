# tests/test_taxes.py
"""Tests for tax computation on expenses and tax summaries."""

from decimal import Decimal

from expenses.models import Expense
from transactions.models import Transaction
from transactions.taxes import build_tax_info, compute_expense_taxes, get_taxes_summary


def taxed_expense(amount, *taxes):
    return Expense(amount=amount, currency="EUR", data={"taxes": list(taxes)})


class TestComputeExpenseTaxes:

    def test_no_tax_lines(self):
        assert compute_expense_taxes(Expense(amount=1200, data={})) is None
        assert compute_expense_taxes(Expense(amount=1200, data={"taxes": []})) is None

    def test_single_tax(self):
        assert compute_expense_taxes(taxed_expense(1200, {"type": "VAT", "rate": 0.20})) == -200

    def test_zero_rate_is_zero_not_none(self):
        result = compute_expense_taxes(taxed_expense(1200, {"type": "VAT", "rate": 0}))

        assert result == 0
        assert result is not None

    def test_rates_are_summed(self):
        expense = taxed_expense(
            11500,
            {"type": "GST", "rate": 0.05},
            {"type": "PST", "rate": 0.10},
        )

        # 11500 / 1.15 = 10000
        assert compute_expense_taxes(expense) == -1500

    def test_rounds_to_minor_units(self):
        # 1000 - 1000 / 1.21 = 173.55...
        assert compute_expense_taxes(taxed_expense(1000, {"type": "VAT", "rate": 0.21})) == -174


class TestBuildTaxInfo:

    def test_first_tax_line_only(self):
        expense = taxed_expense(
            11500,
            {"type": "GST", "rate": 0.05},
            {"type": "PST", "rate": 0.10},
        )

        assert build_tax_info(expense).to_dict() == {
            "type": "GST",
            "rate": 0.05,
            "id": "GST",
            "percentage": 5,
        }

    def test_untaxed(self):
        assert build_tax_info(Expense(amount=100)) is None


def ledger_row(type, tax_amount, tax_id="VAT", rate=Decimal("1")):
    return Transaction(
        type=type,
        kind=Transaction.Kind.EXPENSE,
        amount=0,
        net_amount_in_collective_currency=0,
        currency="EUR",
        tax_amount=tax_amount,
        host_currency_fx_rate=rate,
        data={"tax": {"id": tax_id}} if tax_id else {},
    )


class TestTaxesSummary:

    def test_no_taxed_transactions(self):
        assert get_taxes_summary([ledger_row("DEBIT", None), ledger_row("CREDIT", 0)]) is None

    def test_grouped_by_tax_id(self):
        summary = get_taxes_summary([
            ledger_row("DEBIT", -200),
            ledger_row("DEBIT", -100),
            ledger_row("CREDIT", -50),
            ledger_row("DEBIT", -30, tax_id="GST"),
            ledger_row("DEBIT", None),
        ])

        assert summary == {
            "VAT": {"collected": 50, "paid": -300},
            "GST": {"collected": 0, "paid": -30},
        }

    def test_converted_to_host_currency(self):
        summary = get_taxes_summary([ledger_row("DEBIT", -200, rate=Decimal("1.1"))])

        assert summary == {"VAT": {"collected": 0, "paid": -220}}
