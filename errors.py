"""
Error taxonomy shared by the ledger, the reports and the HTTP layer.

- ValidationError -> caller's fault, nothing was written (400)
- StorageError    -> the database write or scan failed (500)
"""


class ValidationError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageError(Exception):
    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message)
        self.message = message
