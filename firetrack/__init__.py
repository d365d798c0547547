"""
FireTrack - Source Package

The computation layer of a personal-finance / FIRE tracker.
It turns snapshots of transactions, budgets, net worth and a profile
into budget overviews and FIRE progress figures.

DESIGN PRINCIPLES:
1. Core calculations are pure functions over plain records
2. Fail early, fail visibly
3. No silent corrections
4. Every computed report is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "FireTrack Team"
