# transactions/__init__.py
"""
Transactions app - the double-entry ledger.

This app provides:
- Transaction: Ledger rows, always written in debit/credit pairs
- commands: Recording paid expenses (provider-paid and manually paid)
- amounts: Expense/collective/host currency conversion of amounts and fees
- taxes: Tax withheld on expenses and tax summaries
- descriptions: Human-readable transaction descriptions
- queries/exports: Listing and CSV/XLSX export of transactions
"""
