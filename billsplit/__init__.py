"""
BillSplit - Source Package

A small bill-splitting assistant: add the people at the table, add what
was ordered and who shared it, and read off what everybody owes.

DESIGN PRINCIPLES:
1. The ledger is the single source of truth
2. Validate first, mutate second
3. No silent corrections
4. Every user action is auditable
5. The UI is replaceable
"""

__version__ = "1.0.0"
__author__ = "BillSplit Team"
