# collectives/__init__.py
"""
Collectives app - the accounts that money moves between.

Collectives, fiscal hosts and payees are all `Collective` rows;
a host is simply a collective that other collectives point to.
"""
