# expenses/__init__.py
"""
Expenses app - requests for payment submitted against a collective.

A paid expense is turned into ledger transactions by
transactions.commands.
"""
