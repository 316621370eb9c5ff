"""
Typed errors for the payments ledger.

Two tiers: DecodeError and ConfigurationError abort the run, ApplyError
subclasses reject a single event and leave the ledger untouched.
Every class carries a `code` attribute for counting and logging.
"""


class PaymentsError(Exception):
    code: str = "PAYMENTS_ERROR"


class ConfigurationError(PaymentsError):
    """Bad command line usage or environment configuration."""

    code: str = "CONFIGURATION_ERROR"


class DecodeError(PaymentsError):
    """Input row or header could not be decoded into a transaction."""

    code: str = "DECODE_ERROR"

    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}")


class ApplyError(PaymentsError):
    """A transaction was rejected by the ledger. Account state is unchanged."""

    code: str = "APPLY_ERROR"
    reason: str = "transaction rejected"

    def __init__(self, client_id: int, transaction_id: int):
        self.client_id = client_id
        self.transaction_id = transaction_id
        super().__init__(f"Client {client_id}, tx {transaction_id}: {self.reason}")


class AccountLocked(ApplyError):
    code = "ACCOUNT_LOCKED"
    reason = "account is locked"


class MissingAmount(ApplyError):
    code = "MISSING_AMOUNT"
    reason = "amount is required"


class UnknownClient(ApplyError):
    code = "UNKNOWN_CLIENT"
    reason = "client does not exist"


class DuplicateTransaction(ApplyError):
    code = "DUPLICATE_TRANSACTION"
    reason = "deposit with this transaction id already exists"


class InsufficientFunds(ApplyError):
    code = "INSUFFICIENT_FUNDS"
    reason = "cannot withdraw more than available"


class UnknownTransaction(ApplyError):
    code = "UNKNOWN_TRANSACTION"
    reason = "deposit transaction does not exist"


class AlreadyDisputed(ApplyError):
    code = "ALREADY_DISPUTED"
    reason = "deposit is already disputed"


class NotDisputed(ApplyError):
    code = "NOT_DISPUTED"
    reason = "deposit is not disputed"
