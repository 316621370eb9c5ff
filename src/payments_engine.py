import logging
from typing import Iterable, List, Optional

from decoder import read_transactions
from errors import ApplyError
from ledger import Ledger
from models import ClientSummary, ProcessingStats, Transaction

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Feeds decoded transactions into a Ledger, strictly in input order.

    Rejected transactions are logged and counted in `stats`, never retried.
    Decode and I/O errors propagate to the caller and abort the run.
    """

    def __init__(self, ledger: Optional[Ledger] = None):
        self._ledger = ledger if ledger is not None else Ledger()
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> List[ClientSummary]:
        """Process CSV file and return final client summaries."""
        logger.info(f"Processing transactions from {filepath}")
        return self.process_transactions(read_transactions(filepath))

    def process_transactions(self, transactions: Iterable[Transaction]) -> List[ClientSummary]:
        for transaction in transactions:
            try:
                self._ledger.apply(transaction)
            except ApplyError as e:
                self._stats.record_failure(e.code)
                logger.info(f"Rejected {transaction!r}: {e.reason}")
            else:
                self._stats.record_success()

        if self._stats.rejected:
            breakdown = ", ".join(f"{code}={count}" for code, count in sorted(self._stats.rejections_by_code.items()))
            logger.info(f"Rejections by reason: {breakdown}")

        return self._ledger.snapshot()
