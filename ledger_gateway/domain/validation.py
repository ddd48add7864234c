"""Data-quality checks on fetched transactions"""

import logging
from typing import Iterable, List

from ledger_gateway.domain.exceptions import ValidationError
from ledger_gateway.domain.models import Transaction, ZERO
from ledger_gateway.domain.rollup import OPEN_STATUSES

logger = logging.getLogger(__name__)


def transaction_problems(txn: Transaction) -> List[str]:
    """Invariant violations for one transaction (empty when clean)"""
    problems = []

    if txn.amount < ZERO:
        problems.append(f"amount {txn.amount} is negative")

    if txn.balance_due is not None:
        if txn.balance_due < ZERO:
            problems.append(f"balance_due {txn.balance_due} is negative")
        if txn.balance_due > txn.amount:
            problems.append(f"balance_due {txn.balance_due} exceeds amount {txn.amount}")
    elif txn.status in OPEN_STATUSES:
        problems.append(f"balance_due missing on {txn.status} transaction")

    return problems


def check_transactions(transactions: Iterable[Transaction], strict: bool) -> List[Transaction]:
    """
    Check every transaction before aggregation.

    Strict mode raises on the first problem. Otherwise problems are logged
    and the records pass through unchanged; missing balances then count as
    zero in every total.

    Raises:
        ValidationError: In strict mode, on the first invalid transaction
    """
    transactions = list(transactions)

    for txn in transactions:
        problems = transaction_problems(txn)
        if not problems:
            continue
        if strict:
            raise ValidationError(f"Transaction {txn.id} ({txn.transaction_number}): {'; '.join(problems)}")
        logger.warning(
            "Transaction data-quality problem",
            extra={"transaction_id": txn.id, "problems": problems},
        )

    return transactions
