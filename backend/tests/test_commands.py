# tests/test_commands.py
"""
Tests for recording paid expenses in the ledger.

Covers both payment paths:
- Paid through a payout provider (explicit or live FX rate, fees, fee payer)
- Paid manually by the host (validation, currency conversion, fee payer)
"""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import ANY, patch

import pytest

from collectives.models import Collective
from expenses.models import Expense
from transactions.commands import (
    build_manually_paid_expense_record,
    build_paid_expense_record,
    create_transactions_for_manually_paid_expense,
    create_transactions_from_paid_expense,
)
from transactions.exceptions import FxRateUnavailable, InvalidArgument, UnsupportedCurrencyCombination
from transactions.models import Transaction
from transactions.types import Fees, FxRateSource


# =============================================================================
# Paid through a payout provider
# =============================================================================

@pytest.mark.django_db
class TestCreateTransactionsFromPaidExpense:

    def test_single_currency_without_fees(self, host, expense):
        transaction = create_transactions_from_paid_expense(
            host, expense, expense_to_host_fx_rate=1
        )

        assert transaction.type == Transaction.Type.DEBIT
        assert transaction.kind == Transaction.Kind.EXPENSE
        assert transaction.amount == -10000
        assert transaction.amount_in_host_currency == -10000
        assert transaction.net_amount_in_collective_currency == -10000
        assert transaction.currency == "USD"
        assert transaction.host_currency == "USD"
        assert transaction.host_currency_fx_rate == 1
        assert transaction.payment_processor_fee_in_host_currency == 0
        assert transaction.tax_amount is None

    def test_references(self, host, collective, payee, payout_method, user, expense):
        transaction = create_transactions_from_paid_expense(
            host, expense, expense_to_host_fx_rate=1
        )

        assert transaction.expense_id == expense.pk
        assert transaction.collective_id == collective.pk
        assert transaction.from_collective_id == payee.pk
        assert transaction.host_id == host.pk
        assert transaction.payout_method_id == payout_method.pk
        assert transaction.created_by_user_id == user.pk
        assert transaction.description == "Server hosting"
        assert transaction.payment_method_id is None

    def test_fees_paid_by_collective(self, host, expense):
        fees = Fees(
            payment_processor_fee_in_host_currency=300,
            host_fee_in_host_currency=100,
            platform_fee_in_host_currency=50,
        )

        transaction = create_transactions_from_paid_expense(
            host, expense, fees, expense_to_host_fx_rate=1
        )

        assert transaction.amount == -10000
        assert transaction.net_amount_in_collective_currency == -10450
        assert transaction.payment_processor_fee_in_host_currency == -300
        assert transaction.host_fee_in_host_currency == -100
        assert transaction.platform_fee_in_host_currency == -50
        assert "fees_payer" not in transaction.data

    def test_processor_fee_paid_by_payee(self, host, make_expense):
        expense = make_expense(fees_payer=Expense.FeesPayer.PAYEE)

        transaction = create_transactions_from_paid_expense(
            host,
            expense,
            {"payment_processor_fee_in_host_currency": 300},
            expense_to_host_fx_rate=1,
        )

        assert transaction.amount == -9700
        assert transaction.amount_in_host_currency == -9700
        assert transaction.net_amount_in_collective_currency == -10000
        assert transaction.payment_processor_fee_in_host_currency == -300
        assert transaction.data["fees_payer"] == "PAYEE"

    def test_payee_fee_excluded_from_collective_cost(self, host, make_expense):
        expense = make_expense(fees_payer=Expense.FeesPayer.PAYEE)
        fees = Fees(
            payment_processor_fee_in_host_currency=300,
            host_fee_in_host_currency=100,
            platform_fee_in_host_currency=50,
        )
        before = build_paid_expense_record(
            host, make_expense(), fees, expense_to_host_fx_rate=1
        )

        transaction = create_transactions_from_paid_expense(
            host, expense, fees, expense_to_host_fx_rate=1
        )

        assert transaction.amount == before.amount + 300
        assert transaction.net_amount_in_collective_currency == -(10000 + 100 + 50)

    def test_expense_in_foreign_currency(self, host, make_expense):
        expense = make_expense(currency="EUR")

        transaction = create_transactions_from_paid_expense(
            host,
            expense,
            {"payment_processor_fee_in_host_currency": 300},
            expense_to_host_fx_rate=Decimal("1.1"),
        )

        assert transaction.currency == "USD"
        assert transaction.amount == -11000
        assert transaction.amount_in_host_currency == -11000
        assert transaction.net_amount_in_collective_currency == -11300
        assert transaction.host_currency_fx_rate == 1
        assert transaction.data["expense_to_host_fx_rate"] == "1.1"

    def test_collective_in_foreign_currency(self, host, payee):
        collective = Collective.objects.create(slug="eur-collective", name="EUR Collective", currency="EUR", host=host)
        expense = Expense.objects.create(
            collective=collective,
            from_collective=payee,
            description="Venue",
            amount=10000,
            currency="EUR",
        )

        transaction = create_transactions_from_paid_expense(
            host,
            expense,
            {"payment_processor_fee_in_host_currency": 110},
            expense_to_host_fx_rate=Decimal("1.1"),
        )

        assert transaction.currency == "EUR"
        assert transaction.amount == -10000
        assert transaction.amount_in_host_currency == -11000
        assert transaction.net_amount_in_collective_currency == -10100
        assert transaction.payment_processor_fee_in_host_currency == -110
        assert transaction.host_currency_fx_rate == Decimal("1.1")

    def test_unsupported_currency_combination_writes_nothing(self, host, payee):
        collective = Collective.objects.create(slug="gbp-collective", name="GBP Collective", currency="GBP", host=host)
        expense = Expense.objects.create(
            collective=collective,
            from_collective=payee,
            amount=10000,
            currency="EUR",
        )

        with pytest.raises(UnsupportedCurrencyCombination):
            create_transactions_from_paid_expense(host, expense, expense_to_host_fx_rate=Decimal("1.1"))

        assert Transaction.objects.count() == 0

    @pytest.mark.parametrize("source", ["auto", FxRateSource.live()])
    def test_live_fx_rate(self, host, make_expense, source):
        expense = make_expense(currency="EUR")

        with patch("transactions.commands.get_fx_rate", return_value=Decimal("1.1")) as get_fx_rate:
            transaction = create_transactions_from_paid_expense(
                host, expense, expense_to_host_fx_rate=source
            )

        get_fx_rate.assert_called_once_with("EUR", "USD", ANY)
        assert transaction.amount == -11000
        assert transaction.data["expense_to_host_fx_rate"] == "1.1"

    def test_explicit_rate_skips_lookup(self, host, make_expense):
        expense = make_expense(currency="EUR")

        with patch("transactions.commands.get_fx_rate") as get_fx_rate:
            create_transactions_from_paid_expense(host, expense, expense_to_host_fx_rate=Decimal("1.2"))

        get_fx_rate.assert_not_called()

    def test_rate_unavailable_propagates(self, host, make_expense):
        expense = make_expense(currency="EUR")
        error = FxRateUnavailable("EUR", "USD", "provider down")

        with patch("transactions.commands.get_fx_rate", side_effect=error):
            with pytest.raises(FxRateUnavailable) as exc_info:
                create_transactions_from_paid_expense(host, expense, expense_to_host_fx_rate="auto")

        assert exc_info.value is error
        assert Transaction.objects.count() == 0

    def test_invalid_explicit_rate(self, host, expense):
        with pytest.raises(InvalidArgument):
            create_transactions_from_paid_expense(host, expense, expense_to_host_fx_rate=0)

    def test_negative_fee_writes_nothing(self, host, expense):
        with pytest.raises(InvalidArgument):
            create_transactions_from_paid_expense(
                host,
                expense,
                {"payment_processor_fee_in_host_currency": -300},
                expense_to_host_fx_rate=1,
            )

        assert Transaction.objects.count() == 0

    def test_non_numeric_explicit_rate(self, host, expense):
        with pytest.raises(InvalidArgument):
            create_transactions_from_paid_expense(host, expense, expense_to_host_fx_rate="1,1")

        assert Transaction.objects.count() == 0

    def test_taxes(self, host, make_expense):
        expense = make_expense(
            amount=12100,
            data={"taxes": [{"type": "VAT", "rate": 0.21, "id_number": "FRXX999999999"}]},
        )

        transaction = create_transactions_from_paid_expense(host, expense, expense_to_host_fx_rate=1)

        assert transaction.tax_amount == -2100
        assert transaction.data["tax"] == {
            "type": "VAT",
            "rate": 0.21,
            "id_number": "FRXX999999999",
            "id": "VAT",
            "percentage": 21,
        }

    def test_transaction_data_is_stored_and_not_mutated(self, host, make_expense):
        expense = make_expense(fees_payer=Expense.FeesPayer.PAYEE)
        transaction_data = {"payout_batch_id": "batch-42"}

        transaction = create_transactions_from_paid_expense(
            host, expense, expense_to_host_fx_rate=1, transaction_data=transaction_data
        )

        assert transaction.data == {
            "payout_batch_id": "batch-42",
            "fees_payer": "PAYEE",
            "expense_to_host_fx_rate": "1",
        }
        assert transaction_data == {"payout_batch_id": "batch-42"}

    def test_legacy_payment_method(self, host, expense):
        payment_method = SimpleNamespace(pk=77)

        transaction = create_transactions_from_paid_expense(
            host, expense, expense_to_host_fx_rate=1, payment_method=payment_method
        )

        assert transaction.payment_method_id == 77

    def test_collective_loaded_from_id(self, host, collective, expense):
        fresh = Expense.objects.get(pk=expense.pk)

        transaction = create_transactions_from_paid_expense(host, fresh, expense_to_host_fx_rate=1)

        assert transaction.currency == collective.currency


# =============================================================================
# Paid manually by the host
# =============================================================================

@pytest.mark.django_db
class TestCreateTransactionsForManuallyPaidExpense:

    def test_negative_fee(self, host, expense):
        with pytest.raises(InvalidArgument):
            create_transactions_for_manually_paid_expense(host, expense, -1, 10000)

        assert Transaction.objects.count() == 0

    @pytest.mark.parametrize("total", [0, -100])
    def test_non_positive_total(self, host, expense, total):
        with pytest.raises(InvalidArgument):
            create_transactions_for_manually_paid_expense(host, expense, 0, total)

        assert Transaction.objects.count() == 0

    def test_single_currency(self, host, expense):
        transaction = create_transactions_for_manually_paid_expense(host, expense, 300, 10300)

        assert transaction.amount == -10000
        assert transaction.amount_in_host_currency == -10000
        assert transaction.net_amount_in_collective_currency == -10300
        assert transaction.payment_processor_fee_in_host_currency == -300
        assert transaction.host_fee_in_host_currency == 0
        assert transaction.platform_fee_in_host_currency == 0
        assert transaction.host_currency_fx_rate == 1
        assert transaction.data == {"is_manual": True}

    def test_host_in_foreign_currency(self, eur_host, payee):
        collective = Collective.objects.create(slug="usd-in-eu", name="USD in EU", currency="USD", host=eur_host)
        expense = Expense.objects.create(
            collective=collective,
            from_collective=payee,
            amount=10000,
            currency="USD",
        )

        transaction = create_transactions_for_manually_paid_expense(eur_host, expense, 300, 9300)

        # 9000 EUR paid for 10000 USD
        assert transaction.host_currency_fx_rate == Decimal("0.9")
        assert transaction.amount_in_host_currency == -9000
        assert transaction.amount == -10000
        # -9300 / 0.9 = -10333.33...
        assert transaction.net_amount_in_collective_currency == -10333
        assert transaction.currency == "USD"
        assert transaction.host_currency == "EUR"

    def test_expense_currency_must_match_collective(self, eur_host, payee):
        collective = Collective.objects.create(slug="usd-in-eu", name="USD in EU", currency="USD", host=eur_host)
        expense = Expense.objects.create(
            collective=collective,
            from_collective=payee,
            amount=10000,
            currency="GBP",
        )

        with pytest.raises(UnsupportedCurrencyCombination):
            create_transactions_for_manually_paid_expense(eur_host, expense, 0, 9000)

        assert Transaction.objects.count() == 0

    def test_fee_equal_to_total_across_currencies(self, eur_host, payee):
        collective = Collective.objects.create(slug="usd-in-eu", name="USD in EU", currency="USD", host=eur_host)
        expense = Expense.objects.create(
            collective=collective,
            from_collective=payee,
            amount=10000,
            currency="USD",
        )

        with pytest.raises(InvalidArgument):
            create_transactions_for_manually_paid_expense(eur_host, expense, 500, 500)

    def test_taxes_and_caller_data(self, host, make_expense):
        expense = make_expense(amount=1200, data={"taxes": [{"type": "GST", "rate": 0.2}]})

        transaction = create_transactions_for_manually_paid_expense(
            host, expense, 0, 1200, {"reference": "wire-2024-11"}
        )

        assert transaction.tax_amount == -200
        assert transaction.data == {
            "is_manual": True,
            "reference": "wire-2024-11",
            "tax": {"type": "GST", "rate": 0.2, "id": "GST", "percentage": 20},
        }

    def test_payee_pays_fees_uses_amounts_as_given(self, host, make_expense):
        """
        The host admin enters the total already net of the payee's fee, so
        unlike the payout provider path no amount is adjusted here.
        """
        expense = make_expense(fees_payer=Expense.FeesPayer.PAYEE)

        manual = build_manually_paid_expense_record(host, expense, 300, 10300)
        provider = build_paid_expense_record(
            host, expense, {"payment_processor_fee_in_host_currency": 300}, expense_to_host_fx_rate=1
        )

        assert manual.amount == -10000
        assert manual.net_amount_in_collective_currency == -10300
        assert manual.data.fees_payer == "PAYEE"
        assert provider.amount == -9700
        assert provider.net_amount_in_collective_currency == -10000
        assert provider.data.fees_payer == "PAYEE"

    def test_records_double_entry(self, host, payee, expense):
        transaction = create_transactions_for_manually_paid_expense(host, expense, 300, 10300)

        opposite = transaction.get_opposite()
        assert opposite.type == Transaction.Type.CREDIT
        assert opposite.collective_id == payee.pk
        assert opposite.amount == 10300
        assert opposite.net_amount_in_collective_currency == 10000
