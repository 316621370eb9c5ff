from decimal import Decimal
from typing import Dict, List, Optional

from errors import (
    AccountLocked,
    AlreadyDisputed,
    DuplicateTransaction,
    InsufficientFunds,
    MissingAmount,
    NotDisputed,
    UnknownClient,
    UnknownTransaction,
)
from models import (
    Chargeback,
    ClientAccount,
    ClientSummary,
    Deposit,
    DepositRecord,
    Dispute,
    Resolve,
    Transaction,
    Withdrawal,
)


class Ledger:
    """
    Applies transactions to client accounts, one at a time, in input order.

    Every precondition is checked before anything is mutated, so a rejected
    transaction (an ApplyError) leaves all accounts exactly as they were.
    Single writer only: run one Ledger per shard of client ids if ingestion
    has to be parallel.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}

    def apply(self, transaction: Transaction) -> None:
        """
        Apply a single transaction.

        Raises:
            AccountLocked: the client's account was frozen by a chargeback
            MissingAmount: deposit or withdrawal without an amount
            UnknownClient: client has never deposited
            DuplicateTransaction: deposit id already used by this client
            InsufficientFunds: withdrawal larger than available funds
            UnknownTransaction: referenced deposit does not exist for this client
            AlreadyDisputed / NotDisputed: dispute lifecycle out of order
        """
        account = self._accounts.get(transaction.client_id)

        if account is not None and account.locked:
            raise AccountLocked(transaction.client_id, transaction.transaction_id)

        match transaction:
            case Deposit():
                self._handle_deposit(account, transaction)
            case Withdrawal():
                self._handle_withdrawal(account, transaction)
            case Dispute():
                self._handle_dispute(account, transaction)
            case Resolve():
                self._handle_resolve(account, transaction)
            case Chargeback():
                self._handle_chargeback(account, transaction)
            case _:
                raise TypeError(f"Unsupported transaction: {transaction!r}")

    def snapshot(self) -> List[ClientSummary]:
        """Return a summary per known client, ordered by client id."""
        return [ClientSummary.from_account(self._accounts[client_id]) for client_id in sorted(self._accounts)]

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        return self._accounts.get(client_id)

    def _handle_deposit(self, account: Optional[ClientAccount], transaction: Deposit) -> None:
        amount = self._require_amount(transaction)

        if account is not None and transaction.transaction_id in account.deposits:
            raise DuplicateTransaction(transaction.client_id, transaction.transaction_id)

        if account is None:
            account = ClientAccount(client_id=transaction.client_id)
            self._accounts[transaction.client_id] = account

        account.credit(amount)
        account.deposits[transaction.transaction_id] = DepositRecord(amount=amount)

    def _handle_withdrawal(self, account: Optional[ClientAccount], transaction: Withdrawal) -> None:
        amount = self._require_amount(transaction)
        account = self._require_account(account, transaction)

        if account.available < amount:
            raise InsufficientFunds(transaction.client_id, transaction.transaction_id)

        account.debit(amount)

    def _handle_dispute(self, account: Optional[ClientAccount], transaction: Dispute) -> None:
        account = self._require_account(account, transaction)
        deposit = self._require_deposit(account, transaction)

        if deposit.disputed:
            raise AlreadyDisputed(transaction.client_id, transaction.transaction_id)

        # Available goes negative if the deposit was already partly withdrawn.
        account.hold(deposit.amount)
        deposit.disputed = True

    def _handle_resolve(self, account: Optional[ClientAccount], transaction: Resolve) -> None:
        account = self._require_account(account, transaction)
        deposit = self._require_disputed_deposit(account, transaction)

        account.release_hold(deposit.amount)
        deposit.disputed = False

    def _handle_chargeback(self, account: Optional[ClientAccount], transaction: Chargeback) -> None:
        account = self._require_account(account, transaction)
        deposit = self._require_disputed_deposit(account, transaction)

        account.remove_held(deposit.amount)
        deposit.disputed = False
        account.locked = True

    @staticmethod
    def _require_amount(transaction: Transaction) -> Decimal:
        if transaction.amount is None:
            raise MissingAmount(transaction.client_id, transaction.transaction_id)
        return transaction.amount

    @staticmethod
    def _require_account(account: Optional[ClientAccount], transaction: Transaction) -> ClientAccount:
        if account is None:
            raise UnknownClient(transaction.client_id, transaction.transaction_id)
        return account

    @staticmethod
    def _require_deposit(account: ClientAccount, transaction: Transaction) -> DepositRecord:
        deposit = account.deposits.get(transaction.transaction_id)
        if deposit is None:
            raise UnknownTransaction(transaction.client_id, transaction.transaction_id)
        return deposit

    def _require_disputed_deposit(self, account: ClientAccount, transaction: Transaction) -> DepositRecord:
        deposit = self._require_deposit(account, transaction)
        if not deposit.disputed:
            raise NotDisputed(transaction.client_id, transaction.transaction_id)
        return deposit
