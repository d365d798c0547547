"""
Period Aggregator

Sums transaction amounts inside a calendar window, grouped by type or
category. This is the only place that knows how to build month, quarter
and year windows.

DESIGN DECISION: Amounts stay Decimal here. Stored amounts are treated
as magnitudes (abs), the direction always comes from the transaction type,
so a negatively stored expense can never reduce a spending total.
"""

import calendar
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable

from pydantic import BaseModel, ConfigDict, model_validator

from firetrack.models.finance import (
    AnalyticsPeriod,
    MonthlyCategoryBreakdown,
    SavingsRate,
    Transaction,
    TransactionType,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

DEFAULT_UNCATEGORIZED_LABEL = "Senza Categoria"


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move (year, month) by offset months."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


class DateRange(BaseModel):
    """
    Inclusive calendar date range.

    Both bounds belong to the range.
    """
    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def validate_bounds(self) -> "DateRange":
        if self.end < self.start:
            raise ValueError("Range end cannot be before range start")
        return self

    @classmethod
    def for_month(cls, reference: date) -> "DateRange":
        """First through last day of the month containing `reference`."""
        last_day = calendar.monthrange(reference.year, reference.month)[1]
        return cls(
            start=reference.replace(day=1),
            end=reference.replace(day=last_day),
        )

    @classmethod
    def for_quarter(cls, reference: date) -> "DateRange":
        """Calendar quarter containing `reference`."""
        first_month = 3 * ((reference.month - 1) // 3) + 1
        last_month = first_month + 2
        last_day = calendar.monthrange(reference.year, last_month)[1]
        return cls(
            start=date(reference.year, first_month, 1),
            end=date(reference.year, last_month, last_day),
        )

    @classmethod
    def for_year(cls, reference: date) -> "DateRange":
        """Calendar year containing `reference`."""
        return cls(
            start=date(reference.year, 1, 1),
            end=date(reference.year, 12, 31),
        )

    @classmethod
    def trailing_months(cls, reference: date, months: int) -> "DateRange":
        """
        The `months` calendar months ending with the month of `reference`.

        Starts on the first day of the earliest month and ends on
        `reference` itself.
        """
        if months < 1:
            raise ValueError("months must be at least 1")
        year, month = _shift_month(reference.year, reference.month, -(months - 1))
        return cls(start=date(year, month, 1), end=reference)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def month_starts(self) -> list[date]:
        """First day of every calendar month touched by the range, oldest first."""
        starts = []
        year, month = self.start.year, self.start.month
        while (year, month) <= (self.end.year, self.end.month):
            starts.append(date(year, month, 1))
            year, month = _shift_month(year, month, 1)
        return starts

    @property
    def label(self) -> str:
        """YYYY-MM of the first month in the range."""
        return self.start.strftime("%Y-%m")


class PeriodAggregator:
    """
    Aggregates the transactions that fall inside one period.

    Usage:
        aggregator = PeriodAggregator.for_month(transactions, today)
        spent = aggregator.sum_by_type(TransactionType.EXPENSE)
        by_category = aggregator.sum_by_category()
    """

    def __init__(
        self,
        transactions: Iterable[Transaction],
        period: DateRange,
        uncategorized_label: str = DEFAULT_UNCATEGORIZED_LABEL,
    ):
        self.period = period
        self.uncategorized_label = uncategorized_label
        self._transactions = [
            txn for txn in transactions
            if period.contains(txn.transaction_date)
        ]

    @classmethod
    def for_month(
        cls,
        transactions: Iterable[Transaction],
        reference: date,
        uncategorized_label: str = DEFAULT_UNCATEGORIZED_LABEL,
    ) -> "PeriodAggregator":
        return cls(transactions, DateRange.for_month(reference), uncategorized_label)

    @property
    def transactions(self) -> list[Transaction]:
        """Transactions inside the period."""
        return list(self._transactions)

    def sum_by_type(self, transaction_type: TransactionType) -> Decimal:
        """Sum of |amount| over in-period transactions of one type."""
        return sum(
            (txn.magnitude for txn in self._transactions if txn.type == transaction_type),
            ZERO,
        )

    def sum_by_category(
        self,
        transaction_type: TransactionType = TransactionType.EXPENSE,
    ) -> dict[str, Decimal]:
        """
        Totals per category for one transaction type.

        Missing or blank categories are grouped under the uncategorized
        label. Iteration order is by descending total, ties by name.
        """
        return dict(self.sorted_category_totals(transaction_type))

    def sorted_category_totals(
        self,
        transaction_type: TransactionType = TransactionType.EXPENSE,
    ) -> list[tuple[str, Decimal]]:
        totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for txn in self._transactions:
            if txn.type != transaction_type:
                continue
            key = txn.category or self.uncategorized_label
            totals[key] += txn.magnitude

        return sorted(totals.items(), key=lambda item: (-item[1], item[0]))

    def savings_rate(self) -> SavingsRate:
        """
        Income, expenses and the share of income not spent.

        Zero income gives a rate of 0. Negative savings are floored at 0.
        """
        income = self.sum_by_type(TransactionType.INCOME)
        expenses = self.sum_by_type(TransactionType.EXPENSE)

        if income == ZERO:
            rate = ZERO
        else:
            rate = max(ZERO, HUNDRED * (income - expenses) / income)

        return SavingsRate(income=income, expenses=expenses, savings_rate=float(rate))


def monthly_category_breakdown(
    transactions: Iterable[Transaction],
    reference: date,
    period: AnalyticsPeriod = AnalyticsPeriod.MONTH,
    uncategorized_label: str = DEFAULT_UNCATEGORIZED_LABEL,
) -> list[MonthlyCategoryBreakdown]:
    """
    Expense totals per category for each month of the trailing window.

    Every month of the window is present, oldest first, even when
    nothing was spent in it.
    """
    window = DateRange.trailing_months(reference, period.months)
    in_window = [t for t in transactions if window.contains(t.transaction_date)]

    breakdown = []
    for month_start in window.month_starts():
        month_range = DateRange.for_month(month_start)
        # The last month stops at the reference date
        if month_range.end > window.end:
            month_range = DateRange(start=month_range.start, end=window.end)

        aggregator = PeriodAggregator(in_window, month_range, uncategorized_label)
        breakdown.append(
            MonthlyCategoryBreakdown(
                month=month_range.label,
                categories=aggregator.sum_by_category(TransactionType.EXPENSE),
            )
        )

    return breakdown


def annual_expenses(
    transactions: Iterable[Transaction],
    reference: date,
) -> Decimal:
    """Expense total over the trailing 12 months ending at `reference`."""
    window = DateRange.trailing_months(reference, 12)
    return PeriodAggregator(transactions, window).sum_by_type(TransactionType.EXPENSE)

