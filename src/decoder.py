import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Iterator, List, Optional, Type

from errors import DecodeError
from models import (
    Chargeback,
    Deposit,
    Dispute,
    Resolve,
    Transaction,
    TransactionType,
    Withdrawal,
)

logger = logging.getLogger(__name__)

EXPECTED_HEADER = ["type", "client", "tx", "amount"]

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

TRANSACTION_CLASSES: Dict[TransactionType, Type] = {
    TransactionType.DEPOSIT: Deposit,
    TransactionType.WITHDRAWAL: Withdrawal,
    TransactionType.DISPUTE: Dispute,
    TransactionType.RESOLVE: Resolve,
    TransactionType.CHARGEBACK: Chargeback,
}


def read_transactions(filepath: str) -> Iterator[Transaction]:
    """Lazily decode transactions from a CSV file. Reopen the file to restart."""
    with open(filepath, "r", encoding="utf-8-sig", newline="") as f:
        yield from decode_transactions(f)


def decode_transactions(lines: Iterable[str]) -> Iterator[Transaction]:
    """
    Decode CSV lines into typed transactions, in input order.

    The first non-blank row must be the `type,client,tx,amount` header.
    Raises DecodeError on the first row that cannot be decoded.
    """
    reader = csv.reader(lines)
    header: Optional[List[str]] = None

    for row in _read_rows(reader):
        fields = [value.strip() for value in row]
        if not any(fields):
            continue

        if header is None:
            header = [name.lower() for name in fields]
            if header != EXPECTED_HEADER:
                raise DecodeError(reader.line_num, f"Malformed header {row}, expected {','.join(EXPECTED_HEADER)}")
            continue

        yield _parse_row(fields, reader.line_num)


def _read_rows(reader) -> Iterator[List[str]]:
    try:
        yield from reader
    except csv.Error as e:
        raise DecodeError(reader.line_num, f"Malformed CSV row: {e}") from e
    except UnicodeDecodeError as e:
        # Text is decoded in chunks, so the bad byte may sit a few lines further on.
        raise DecodeError(reader.line_num + 1, f"Input is not valid UTF-8: {e.reason}") from e


def _parse_row(fields: List[str], line_number: int) -> Transaction:
    # The trailing amount column may be left out entirely on dispute rows.
    if len(fields) == len(EXPECTED_HEADER) - 1:
        fields = fields + [""]
    if len(fields) != len(EXPECTED_HEADER):
        raise DecodeError(line_number, f"Expected {len(EXPECTED_HEADER)} columns, got {len(fields)}")

    type_str, client_str, tx_str, amount_str = fields

    try:
        transaction_type = TransactionType(type_str.lower())
    except ValueError:
        raise DecodeError(line_number, f"Unknown transaction type '{type_str}'") from None

    client_id = _parse_id(client_str, "client", MAX_CLIENT_ID, line_number)
    transaction_id = _parse_id(tx_str, "tx", MAX_TRANSACTION_ID, line_number)
    transaction_class = TRANSACTION_CLASSES[transaction_type]

    if transaction_type in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL):
        amount = _parse_amount(amount_str, line_number)
        return transaction_class(client_id=client_id, transaction_id=transaction_id, amount=amount)

    if amount_str:
        logger.debug(f"Line {line_number}: ignoring amount on {transaction_type.value}")
    return transaction_class(client_id=client_id, transaction_id=transaction_id)


def _parse_id(value: str, column: str, maximum: int, line_number: int) -> int:
    if not (value.isascii() and value.isdigit()):
        raise DecodeError(line_number, f"Column '{column}' is not an unsigned integer: '{value}'")
    parsed = int(value)
    if parsed > maximum:
        raise DecodeError(line_number, f"Column '{column}' out of range: {parsed} > {maximum}")
    return parsed


def _parse_amount(value: str, line_number: int) -> Optional[Decimal]:
    if not value:
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise DecodeError(line_number, f"Column 'amount' is not a decimal: '{value}'") from None
    if not amount.is_finite():
        raise DecodeError(line_number, f"Column 'amount' is not finite: '{value}'")
    if amount < 0:
        raise DecodeError(line_number, f"Column 'amount' is negative: '{value}'")
    return amount
