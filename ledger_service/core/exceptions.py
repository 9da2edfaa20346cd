from fastapi import HTTPException


class LedgerError(HTTPException):
    """Base class for errors surfaced to API callers"""
    status_code = 400
    default_detail = "Request rejected"

    def __init__(self, detail: str = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class UserNotFound(LedgerError):
    status_code = 404
    default_detail = "User not found"


class CounterpartNotFound(LedgerError):
    status_code = 404
    default_detail = "User not found"


class InvalidCounterpart(LedgerError):
    status_code = 400
    default_detail = "Cannot compute a balance with yourself"


class GroupNotFound(LedgerError):
    status_code = 404
    default_detail = "Group not found"


class NotAMember(LedgerError):
    status_code = 403
    default_detail = "You are not a member of this group"


class InvalidSettlement(LedgerError):
    status_code = 400
    default_detail = "Invalid settlement"


class InvalidExpense(LedgerError):
    status_code = 400
    default_detail = "Invalid expense"


class InvalidEntityType(LedgerError):
    status_code = 400
    default_detail = "Invalid entity type; expected 'user' or 'group'"
