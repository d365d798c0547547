"""
Two-Stage Validation of FIRE Parameters

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Values that would make a formula undefined (zero withdrawal rate)
- Expense figures present
- This catches profiles the FIRE formulas cannot be run on

STAGE 2 - SEMANTIC VALIDATION:
- Plausibility checks
- Retirement age not in the future
- Unusually high withdrawal rate or expected return
- Monthly and annual expenses that disagree
- This catches figures that compute but are probably wrong

IMPORTANT: Validation NEVER silently fixes issues.
It reports them; the profile is used exactly as stored.
"""

from decimal import Decimal

from firetrack.models.finance import (
    Profile,
    ValidationIssue,
    ValidationResult,
)

MAX_PLAUSIBLE_SWR = Decimal("10")
MAX_PLAUSIBLE_RETURN = Decimal("20")
EXPENSE_MISMATCH_TOLERANCE = Decimal("0.01")


class ParameterValidationError(Exception):
    """FIRE parameters contain errors; the result lists them."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(
            issue.message for issue in result.issues if issue.severity == "error"
        )
        super().__init__(f"Invalid FIRE parameters: {messages}")


class FireParameterValidator:
    """
    Validates a profile's FIRE parameters through a two-stage pipeline.

    Stage 1: Schema validation
    Stage 2: Semantic validation (only when stage 1 passes)
    """

    def _validate_schema(
        self,
        profile: Profile,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        if profile.swr_rate <= 0:
            issues.append(ValidationIssue(
                field="swr_rate",
                issue_type="invalid_value",
                message="Safe withdrawal rate must be greater than zero",
                severity="error",
                suggested_fix="Use a rate such as 4 (the 4% rule)",
            ))

        if profile.annual_expenses is None and profile.monthly_expenses is None:
            issues.append(ValidationIssue(
                field="annual_expenses",
                issue_type="missing",
                message="No expense figure on the profile; recorded expenses will be used",
                severity="info",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def _validate_semantic(
        self,
        profile: Profile,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Checks:
        - Retirement age after current age
        - Withdrawal rate and expected return within plausible bounds
        - Monthly x 12 agrees with annual expenses

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        if profile.retirement_age <= profile.current_age:
            issues.append(ValidationIssue(
                field="retirement_age",
                issue_type="suspicious_value",
                message=(
                    f"Retirement age ({profile.retirement_age}) is not after "
                    f"current age ({profile.current_age}); Coast FIRE will be "
                    "at least the full FIRE number"
                ),
                severity="warning",
                suggested_fix="Set a retirement age in the future",
            ))

        if profile.swr_rate > MAX_PLAUSIBLE_SWR:
            issues.append(ValidationIssue(
                field="swr_rate",
                issue_type="suspicious_value",
                message=f"Withdrawal rate of {profile.swr_rate}% is unusually high",
                severity="warning",
                suggested_fix="Rates are percentages: 4 means 4%",
            ))

        if profile.expected_return > MAX_PLAUSIBLE_RETURN:
            issues.append(ValidationIssue(
                field="expected_return",
                issue_type="suspicious_value",
                message=f"Expected return of {profile.expected_return}% is unusually high",
                severity="warning",
                suggested_fix="Rates are percentages: 7 means 7%",
            ))

        if profile.monthly_expenses is not None and profile.annual_expenses is not None:
            expected_annual = profile.monthly_expenses * 12
            if abs(expected_annual - profile.annual_expenses) > EXPENSE_MISMATCH_TOLERANCE:
                issues.append(ValidationIssue(
                    field="annual_expenses",
                    issue_type="mismatch",
                    message=(
                        f"Annual expenses ({profile.annual_expenses}) differ from "
                        f"12 x monthly expenses ({expected_annual}); annual expenses are used"
                    ),
                    severity="info",
                ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def validate(self, profile: Profile) -> ValidationResult:
        """
        Run full two-stage validation pipeline.

        Returns:
            ValidationResult with all issues found
        """
        all_issues = []

        # Stage 1: Schema validation
        schema_valid, schema_issues = self._validate_schema(profile)
        all_issues.extend(schema_issues)

        # Only run stage 2 if stage 1 passes
        semantic_valid = False
        if schema_valid:
            semantic_valid, semantic_issues = self._validate_semantic(profile)
            all_issues.extend(semantic_issues)

        warnings = [issue.message for issue in all_issues if issue.severity == "warning"]

        return ValidationResult(
            profile_id=profile.id,
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=all_issues,
            warnings=warnings,
        )

    def validate_or_raise(self, profile: Profile) -> ValidationResult:
        """Validate and raise ParameterValidationError on any error-level issue."""
        result = self.validate(profile)
        if result.has_errors:
            raise ParameterValidationError(result)
        return result
