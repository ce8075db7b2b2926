# backend/app/errors.py


class FinanceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidPayload(FinanceError):
    status_code = 400


class NotFound(FinanceError):
    status_code = 404


class StoreUnavailable(FinanceError):
    status_code = 500


class DecodeFailure(FinanceError):
    status_code = 400
