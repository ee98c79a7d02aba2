"""
Carbon coefficients per activity type and quantity normalization.

Coefficients are tCO2e per unit of activity: emissions are negative,
sequestration is positive.
"""

import logging
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Mapping

from carbon_ledger.core.config import Config
from carbon_ledger.utils.constants import (
    EMISSION_ACTIVITY_TYPES,
    SEQUESTRATION_ACTIVITY_TYPES,
    ActivityLogType,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")

DEFAULT_COEFFICIENTS: Mapping[str, Decimal] = MappingProxyType(
    {
        ActivityLogType.PLOWING.value: Decimal("-0.01"),
        ActivityLogType.SEEDING.value: Decimal("-0.002"),
        ActivityLogType.HARVESTING.value: Decimal("-0.005"),
        ActivityLogType.FERTILIZER.value: Decimal("-0.001"),
        ActivityLogType.PESTICIDE.value: Decimal("-0.0005"),
        ActivityLogType.IRRIGATION.value: Decimal("-0.0008"),
        ActivityLogType.MACHINERY.value: Decimal("-0.02"),
        ActivityLogType.TREE_PLANTING.value: Decimal("0.1"),
        ActivityLogType.COVER_CROPPING.value: Decimal("0.02"),
    }
)


def normalize_quantity(quantity: Any) -> Decimal:
    """
    Normalize a reported quantity for calculations.

    Missing, non-numeric and non-finite quantities count as 1.

    Example:
        >>> normalize_quantity("2.5")
        Decimal('2.5')
        >>> normalize_quantity(None)
        Decimal('1')
        >>> normalize_quantity("lots")
        Decimal('1')
        >>> normalize_quantity("1,000")
        Decimal('1')
    """
    if quantity is None or isinstance(quantity, bool):
        return ONE

    if isinstance(quantity, Decimal):
        value = quantity
    else:
        try:
            if isinstance(quantity, str):
                quantity = quantity.strip()
            value = Decimal(str(quantity))
        except (InvalidOperation, ValueError, TypeError):
            return ONE

    if not value.is_finite():
        return ONE
    return value


class CoefficientTable:
    """
    Read-only mapping from activity type to signed tCO2e-per-unit rate.

    Built once at startup and passed to the services that need it.
    Unknown activity types have a coefficient of zero.
    """

    __slots__ = ("_rates",)

    def __init__(self, rates: Mapping[str, Decimal] = DEFAULT_COEFFICIENTS):
        self._rates = MappingProxyType(
            {str(k): Decimal(str(v)) for k, v in rates.items()}
        )

    @property
    def rates(self) -> Mapping[str, Decimal]:
        return self._rates

    def coefficient(self, activity_type: str) -> Decimal:
        """Rate for an activity type, 0 if unknown."""
        return self._rates.get(activity_type, ZERO)

    def delta(self, activity_type: str, quantity: Any) -> Decimal:
        """Signed tCO2e contribution of one log."""
        return self.coefficient(activity_type) * normalize_quantity(quantity)

    def __contains__(self, activity_type: str) -> bool:
        return activity_type in self._rates

    def __repr__(self):
        return f"<CoefficientTable: {len(self._rates)} activity types>"

    @classmethod
    def with_overrides(cls, overrides: Mapping[str, Any]) -> "CoefficientTable":
        """
        Build a table from the defaults plus overrides.

        Raises:
            ValueError: If an override breaks the sign convention of a known type
                or is not a finite number
        """
        rates = dict(DEFAULT_COEFFICIENTS)
        for activity_type, raw_value in overrides.items():
            try:
                value = Decimal(str(raw_value))
            except InvalidOperation as e:
                raise ValueError(
                    f"Coefficient for {activity_type} is not a number: {raw_value!r}"
                ) from e
            if not value.is_finite():
                raise ValueError(f"Coefficient for {activity_type} must be finite")
            if activity_type in EMISSION_ACTIVITY_TYPES and value > 0:
                raise ValueError(
                    f"Emission activity {activity_type} cannot have a positive coefficient"
                )
            if activity_type in SEQUESTRATION_ACTIVITY_TYPES and value < 0:
                raise ValueError(
                    f"Sequestration activity {activity_type} cannot have a negative coefficient"
                )
            rates[activity_type] = value
        return cls(rates)


def load_coefficient_table(config: Config) -> CoefficientTable:
    """
    Build the process-wide coefficient table from config.

    Reads optional overrides from the ``[ledger.coefficients]`` section.
    """
    overrides = config.section("ledger").get("coefficients", {})
    if overrides:
        logger.info(f"Applying coefficient overrides: {sorted(overrides)}")
    return CoefficientTable.with_overrides(overrides)
