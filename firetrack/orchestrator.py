"""
Main Orchestrator for FireTrack

This module ties together all the components and defines the
end-to-end flows the host application calls:
1. Budget reports (overview, category spending, savings rate, analytics, alerts)
2. FIRE reports (progress, projection, net worth history)
3. Profile (lazy creation with configured defaults)

Each flow: fetch snapshot → validate → compute → audit.

DESIGN DECISION: The orchestrator enforces the boundaries:
- The calculation modules only ever see plain records
- A missing profile is an error, never silently replaced by defaults
- Invalid FIRE parameters are reported, never corrected
- Every computed report is audited
"""

from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from firetrack.aggregation import (
    DateRange,
    PeriodAggregator,
    annual_expenses,
    current_net_worth,
    monthly_category_breakdown,
    net_worth_history,
)
from firetrack.audit import AuditLogger, create_correlation_id
from firetrack.budgets import (
    BudgetEvaluator,
    check_budget_alerts,
    select_active_budgets,
)
from firetrack.config import (
    AppSettings,
    BudgetSettings,
    FireDefaultsSettings,
    get_settings,
)
from firetrack.fire import (
    DegenerateRateError,
    compute_fire_progress,
    time_to_fire,
)
from firetrack.models.finance import (
    AnalyticsPeriod,
    BudgetAlert,
    BudgetOverviewItem,
    BudgetStatus,
    CategorySpendingEntry,
    FireProgress,
    MonthlyCategoryBreakdown,
    NetWorthEntry,
    Profile,
    SavingsRate,
    TimeToFire,
    TransactionType,
)
from firetrack.presentation import category_spending_entries
from firetrack.services.storage import (
    AuditStorageInterface,
    FinanceStorageInterface,
    InMemoryAuditStorage,
    InMemoryFinanceStorage,
    ProfileNotFoundError,
    StorageError,
)
from firetrack.validation import FireParameterValidator, ParameterValidationError


class BudgetFlow:
    """
    Orchestrates the budget reports.

    Every report defaults to the calendar month containing `today`.
    Callers may pass an explicit DateRange instead.
    """

    def __init__(
        self,
        storage: FinanceStorageInterface,
        settings: Optional[BudgetSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._settings = settings or get_settings().budget
        self._audit_logger = audit_logger
        self._evaluator = BudgetEvaluator(self._settings.default_alert_threshold)

    async def _fetch_transactions(
        self,
        user_id: str,
        period: DateRange,
        correlation_id: UUID,
        transaction_type: Optional[TransactionType] = None,
    ):
        try:
            return await self._storage.list_transactions(
                user_id,
                date_from=period.start,
                date_to=period.end,
                transaction_type=transaction_type,
            )
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_error(
                    error_type="storage_error",
                    error_message=str(e),
                    details={"user_id": user_id, "operation": "list_transactions"},
                    correlation_id=correlation_id,
                )
            raise

    async def get_overview(
        self,
        user_id: str,
        today: Optional[date] = None,
        period: Optional[DateRange] = None,
    ) -> list[BudgetOverviewItem]:
        """
        Budget-vs-spend overview of the ACTIVE budgets applying to the period.

        Returns:
            One item per budget, sorted by category
        """
        correlation_id = create_correlation_id()
        period = period or DateRange.for_month(today or date.today())

        transactions = await self._fetch_transactions(
            user_id, period, correlation_id, TransactionType.EXPENSE
        )
        budgets = select_active_budgets(
            await self._storage.list_budgets(user_id, status=BudgetStatus.ACTIVE),
            period,
        )

        aggregator = PeriodAggregator(
            transactions, period, self._settings.uncategorized_label
        )
        items = self._evaluator.evaluate(budgets, aggregator.sum_by_category())

        if self._audit_logger:
            statuses = Counter(item.status.value for item in items)
            await self._audit_logger.log_budget_overview(
                user_id=user_id,
                month=period.label,
                item_count=len(items),
                statuses=dict(statuses),
                correlation_id=correlation_id,
            )

        return items

    async def get_category_spending(
        self,
        user_id: str,
        today: Optional[date] = None,
        period: Optional[DateRange] = None,
    ) -> list[CategorySpendingEntry]:
        """Expense totals per category with chart colours, largest first."""
        correlation_id = create_correlation_id()
        period = period or DateRange.for_month(today or date.today())

        transactions = await self._fetch_transactions(
            user_id, period, correlation_id, TransactionType.EXPENSE
        )
        aggregator = PeriodAggregator(
            transactions, period, self._settings.uncategorized_label
        )
        entries = category_spending_entries(
            aggregator.sorted_category_totals(TransactionType.EXPENSE),
            self._settings.category_colors,
            self._settings.fallback_palette,
        )

        if self._audit_logger:
            await self._audit_logger.log_category_spending(
                user_id=user_id,
                month=period.label,
                category_count=len(entries),
                correlation_id=correlation_id,
            )

        return entries

    async def get_savings_rate(
        self,
        user_id: str,
        today: Optional[date] = None,
        period: Optional[DateRange] = None,
    ) -> SavingsRate:
        """Income, expenses and savings rate for the period."""
        correlation_id = create_correlation_id()
        period = period or DateRange.for_month(today or date.today())

        transactions = await self._fetch_transactions(user_id, period, correlation_id)
        savings = PeriodAggregator(transactions, period).savings_rate()

        if self._audit_logger:
            await self._audit_logger.log_savings_rate(
                user_id=user_id,
                month=period.label,
                savings_rate=savings.savings_rate,
                correlation_id=correlation_id,
            )

        return savings

    async def get_analytics(
        self,
        user_id: str,
        period: AnalyticsPeriod = AnalyticsPeriod.MONTH,
        today: Optional[date] = None,
    ) -> list[MonthlyCategoryBreakdown]:
        """Monthly expense breakdown over the trailing window of `period`."""
        correlation_id = create_correlation_id()
        today = today or date.today()
        window = DateRange.trailing_months(today, period.months)

        transactions = await self._fetch_transactions(
            user_id, window, correlation_id, TransactionType.EXPENSE
        )
        breakdown = monthly_category_breakdown(
            transactions, today, period, self._settings.uncategorized_label
        )

        if self._audit_logger:
            await self._audit_logger.log_analytics(
                user_id=user_id,
                period=period.value,
                month_count=len(breakdown),
                correlation_id=correlation_id,
            )

        return breakdown

    async def check_alerts(
        self,
        user_id: str,
        today: Optional[date] = None,
    ) -> list[BudgetAlert]:
        """
        Raise and store the alerts due for the user's ACTIVE budgets.

        Returns:
            The newly raised alerts only
        """
        correlation_id = create_correlation_id()
        today = today or date.today()

        # Every budget period (month, quarter, year) falls inside the calendar year
        transactions = await self._fetch_transactions(
            user_id, DateRange.for_year(today), correlation_id, TransactionType.EXPENSE
        )
        budgets = await self._storage.list_budgets(user_id, status=BudgetStatus.ACTIVE)
        existing = await self._storage.list_alerts(user_id)

        alerts = check_budget_alerts(
            budgets,
            transactions,
            today,
            existing,
            default_threshold=self._settings.default_alert_threshold,
            period_ending_days=self._settings.period_ending_days,
        )
        for alert in alerts:
            await self._storage.add_alert(alert)

        if self._audit_logger:
            await self._audit_logger.log_budget_alerts(
                user_id=user_id,
                alerts=[alert.model_dump(mode="json") for alert in alerts],
                correlation_id=correlation_id,
            )

        return alerts


class ProfileFlow:
    """
    Orchestrates profile access.

    A user has exactly one profile. It is created with the configured
    defaults the first time it is requested through this flow.
    """

    def __init__(
        self,
        storage: FinanceStorageInterface,
        fire_settings: Optional[FireDefaultsSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._fire_settings = fire_settings or get_settings().fire
        self._audit_logger = audit_logger

    def default_profile(self, user_id: str) -> Profile:
        defaults = self._fire_settings
        return Profile(
            id=user_id,
            swr_rate=defaults.swr_rate,
            current_age=defaults.current_age,
            retirement_age=defaults.retirement_age,
            expected_return=defaults.expected_return,
            inflation_rate=defaults.inflation_rate,
            monthly_expenses=defaults.monthly_expenses,
            annual_expenses=defaults.annual_expenses,
        )

    async def get_or_create(self, user_id: str) -> Profile:
        profile = await self._storage.get_profile(user_id)
        if profile is not None:
            return profile

        profile = self.default_profile(user_id)
        await self._storage.save_profile(profile)

        if self._audit_logger:
            await self._audit_logger.log_profile_created(
                user_id=user_id,
                correlation_id=create_correlation_id(),
            )

        return profile


class FireFlow:
    """
    Orchestrates the FIRE reports.

    Flow:
    1. Load profile (missing → ProfileNotFoundError)
    2. Validate parameters (errors → ParameterValidationError)
    3. Resolve net worth and annual expenses
    4. Compute targets and progress
    """

    def __init__(
        self,
        storage: FinanceStorageInterface,
        fire_settings: Optional[FireDefaultsSettings] = None,
        app_settings: Optional[AppSettings] = None,
        validator: Optional[FireParameterValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._fire_settings = fire_settings or get_settings().fire
        self._app_settings = app_settings or get_settings().app
        self._validator = validator or FireParameterValidator()
        self._audit_logger = audit_logger

    async def _load_profile(self, user_id: str, correlation_id: UUID) -> Profile:
        profile = await self._storage.get_profile(user_id)
        if profile is None:
            if self._audit_logger:
                await self._audit_logger.log_profile_not_found(
                    user_id=user_id,
                    correlation_id=correlation_id,
                )
            raise ProfileNotFoundError(user_id)

        result = self._validator.validate(profile)
        if result.has_errors:
            if self._audit_logger:
                await self._audit_logger.log_validation_failed(
                    user_id=user_id,
                    stage="schema" if not result.schema_valid else "semantic",
                    issues=[issue.model_dump() for issue in result.issues],
                    correlation_id=correlation_id,
                )
            raise ParameterValidationError(result)

        return profile

    async def _annual_expenses(self, profile: Profile, today: date) -> Decimal:
        """Profile annual figure, else monthly x 12, else recorded expenses."""
        if profile.annual_expenses:
            return profile.annual_expenses
        if profile.monthly_expenses:
            return profile.monthly_expenses * 12

        window = DateRange.trailing_months(today, 12)
        transactions = await self._storage.list_transactions(
            profile.id,
            date_from=window.start,
            date_to=window.end,
            transaction_type=TransactionType.EXPENSE,
        )
        return annual_expenses(transactions, today)

    async def _net_worth(self, user_id: str, today: date) -> Decimal:
        entries = await self._storage.list_net_worth(user_id)
        return current_net_worth(entries, today)

    async def _compute_progress(
        self,
        profile: Profile,
        today: date,
        correlation_id: UUID,
    ) -> FireProgress:
        net_worth = await self._net_worth(profile.id, today)
        expenses = await self._annual_expenses(profile, today)

        try:
            progress = compute_fire_progress(
                current_net_worth=net_worth,
                annual_expenses=expenses,
                swr_rate=profile.swr_rate,
                current_age=profile.current_age,
                retirement_age=profile.retirement_age,
                expected_return=profile.expected_return,
                part_time_income=self._fire_settings.part_time_income,
            )
        except DegenerateRateError as e:
            if self._audit_logger:
                await self._audit_logger.log_degenerate_input(
                    user_id=profile.id,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_fire_progress(
                user_id=profile.id,
                fire_target=progress.fire_target,
                fire_progress=progress.fire_progress,
                correlation_id=correlation_id,
            )

        return progress

    async def get_progress(
        self,
        user_id: str,
        today: Optional[date] = None,
    ) -> FireProgress:
        """
        FIRE, Coast FIRE and Barista FIRE targets and progress.

        Raises:
            ProfileNotFoundError: If the user has no profile
            ParameterValidationError: If the profile's FIRE parameters contain errors
        """
        correlation_id = create_correlation_id()
        today = today or date.today()

        profile = await self._load_profile(user_id, correlation_id)
        return await self._compute_progress(profile, today, correlation_id)

    async def project_time_to_fire(
        self,
        user_id: str,
        today: Optional[date] = None,
    ) -> TimeToFire:
        """
        Months until the FIRE number at the savings of the last 12 months.

        Uses the profile's expected return and inflation. The progress and
        projection events share one correlation ID.
        """
        correlation_id = create_correlation_id()
        today = today or date.today()

        profile = await self._load_profile(user_id, correlation_id)
        progress = await self._compute_progress(profile, today, correlation_id)

        window = DateRange.trailing_months(today, 12)
        transactions = await self._storage.list_transactions(
            user_id, date_from=window.start, date_to=window.end
        )
        aggregator = PeriodAggregator(transactions, window)
        annual_savings = (
            aggregator.sum_by_type(TransactionType.INCOME)
            - aggregator.sum_by_type(TransactionType.EXPENSE)
        )

        projection = time_to_fire(
            current_savings=progress.current_net_worth,
            annual_savings=annual_savings,
            target=progress.fire_target,
            expected_return=float(profile.expected_return) / 100,
            inflation_rate=float(profile.inflation_rate) / 100,
            max_months=self._app_settings.max_projection_months,
        )

        if self._audit_logger:
            await self._audit_logger.log_fire_projection(
                user_id=user_id,
                years=projection.years,
                reached=projection.reached,
                correlation_id=correlation_id,
            )

        return projection

    async def get_net_worth_history(
        self,
        user_id: str,
        today: Optional[date] = None,
        months: Optional[int] = None,
    ) -> list[NetWorthEntry]:
        """Net worth entries of the trailing months, oldest first."""
        today = today or date.today()
        months = months or self._app_settings.net_worth_history_months
        entries = await self._storage.list_net_worth(user_id)
        return net_worth_history(entries, today, months)


def create_app_components(
    finance_storage: Optional[FinanceStorageInterface] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
) -> tuple[BudgetFlow, FireFlow, ProfileFlow]:
    """
    Factory function to create all application components.

    Args:
        finance_storage: Data source of the host application.
                        Defaults to an in-memory store.
        audit_storage: Where audit events are persisted.
                      Defaults to an in-memory log.

    Returns:
        (budget_flow, fire_flow, profile_flow)
    """
    finance_storage = finance_storage or InMemoryFinanceStorage()
    audit_logger = AuditLogger(audit_storage or InMemoryAuditStorage())

    settings = get_settings()

    budget_flow = BudgetFlow(
        storage=finance_storage,
        settings=settings.budget,
        audit_logger=audit_logger,
    )
    fire_flow = FireFlow(
        storage=finance_storage,
        fire_settings=settings.fire,
        app_settings=settings.app,
        audit_logger=audit_logger,
    )
    profile_flow = ProfileFlow(
        storage=finance_storage,
        fire_settings=settings.fire,
        audit_logger=audit_logger,
    )

    return budget_flow, fire_flow, profile_flow
