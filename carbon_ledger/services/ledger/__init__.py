"""
Carbon ledger services.
"""
from carbon_ledger.services.ledger.coefficients import (
    DEFAULT_COEFFICIENTS,
    CoefficientTable,
    load_coefficient_table,
    normalize_quantity,
)
from carbon_ledger.services.ledger.ledger_calculator import (
    LedgerCalculator,
    build_snapshot,
)

__all__ = [
    "DEFAULT_COEFFICIENTS",
    "CoefficientTable",
    "LedgerCalculator",
    "build_snapshot",
    "load_coefficient_table",
    "normalize_quantity",
]
