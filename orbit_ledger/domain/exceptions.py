"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidTransactionDataError(DomainException):
    """Transaction input is malformed (non-positive amount, unknown type, ...)"""

    pass


class TransactionNotFoundError(DomainException):
    """No transaction with the given id exists in the ledger"""

    def __init__(self, transaction_id: str):
        super().__init__(f"Transaction {transaction_id} not found")
        self.transaction_id = transaction_id


class InvalidMonthKeyError(DomainException):
    """Month key is not a valid YYYY-MM string"""

    pass
