"""Credit eligibility rule.

A user becomes eligible for payroll-deductible credit once enough whole
months have elapsed since enrollment (date_creation). Both store backends
and the User aggregate go through this module so they always agree.
"""

from datetime import datetime

from ..core.config import settings
from ..core.constants import CreditEligibility
from ..utils.formatting import parse_datetime, whole_months_between


def compute_credit_eligibility(
    date_creation: str,
    now: datetime,
    minimum_months: int | None = None
) -> int:
    """Compute the credit eligibility flag for an enrollment date.

    Args:
        date_creation: Enrollment timestamp ("YYYY-MM-DD HH:MM:SS")
        now: Reference instant (naive, same clock as date_creation)
        minimum_months: Threshold in whole months (default from settings)

    Returns:
        1 if at least `minimum_months` whole months have elapsed, else 0

    Raises:
        ValueError: If date_creation is not in the persisted format
    """
    created_at = parse_datetime(date_creation)
    if created_at is None:
        raise ValueError(f"Invalid enrollment date: {date_creation!r}")

    threshold = (
        settings.CREDIT_ELIGIBILITY_MIN_MONTHS if minimum_months is None
        else minimum_months
    )

    if whole_months_between(created_at, now) >= threshold:
        return CreditEligibility.ELIGIBLE
    return CreditEligibility.NOT_ELIGIBLE
