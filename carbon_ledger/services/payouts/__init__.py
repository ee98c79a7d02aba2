"""
Payout request workflow.
"""
from carbon_ledger.services.payouts.payout_workflow import (
    PayoutWorkflow,
    decide_status,
    parse_amount,
)

__all__ = ["PayoutWorkflow", "decide_status", "parse_amount"]
