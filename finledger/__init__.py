"""
Finance Ledger - Source Package

A personal finance ledger: record income, expense and investment entries,
then derive the running balance, per-period totals, expense breakdowns by
category and month-by-month trends.

DESIGN PRINCIPLES:
1. The store is the single source of truth
2. Every view is a pure function of (entries, filters)
3. Balance is lifetime; period filters only scope the per-type totals
4. Money is Decimal end to end; formatting happens at the edge
5. A corrupt snapshot never crashes startup
"""

__version__ = "1.0.0"
