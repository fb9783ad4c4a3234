"""
Salary Range Value Object
Immutable salary range with validation
"""
from dataclasses import dataclass
from typing import Optional

from ..enums import SalaryPeriod


@dataclass(frozen=True)
class SalaryRange:
    """Salary range value object"""

    min_salary: Optional[int] = None
    max_salary: Optional[int] = None
    currency: str = "SZL"
    period: SalaryPeriod = SalaryPeriod.MONTHLY

    def __post_init__(self):
        """Validate salary range"""
        if self.min_salary is not None and self.min_salary < 0:
            raise ValueError("Minimum salary cannot be negative")

        if self.max_salary is not None:
            if self.max_salary < 0:
                raise ValueError("Maximum salary cannot be negative")
            if self.min_salary is not None and self.max_salary < self.min_salary:
                raise ValueError("Maximum salary cannot be less than minimum salary")

    def is_empty(self) -> bool:
        return self.min_salary is None and self.max_salary is None

    def contains(self, salary: int) -> bool:
        """Check if salary falls within range"""
        if self.min_salary is not None and salary < self.min_salary:
            return False
        if self.max_salary is not None and salary > self.max_salary:
            return False
        return True

    def __str__(self) -> str:
        if self.is_empty():
            return "Not specified"
        if self.min_salary is not None and self.max_salary is not None:
            return f"{self.currency} {self.min_salary:,} - {self.max_salary:,} / {self.period.value}"
        if self.min_salary is not None:
            return f"{self.currency} {self.min_salary:,}+ / {self.period.value}"
        return f"Up to {self.currency} {self.max_salary:,} / {self.period.value}"
