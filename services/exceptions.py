# services/exceptions.py
"""
Domain errors raised by the service layer.

Each error carries the user-facing message and the HTTP status it maps to;
main.setup_exception_handlers turns them into `{"message": ...}` responses.
"""
from decimal import Decimal
from typing import Any, Optional


class DomainError(Exception):
     """Base class for every error the API reports with a business reason."""
     status_code = 500

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message

     def to_body(self) -> dict:
          return {"message": self.message}


class ValidationError(DomainError):
     """Malformed or out-of-range input."""
     status_code = 400


class ConstraintViolationError(ValidationError):
     """A foreign key points nowhere, or the row is still referenced."""


class NotFoundError(DomainError):
     status_code = 404

     def __init__(self, entity: str, entity_id: Any):
          super().__init__(f"{entity} not found")
          self.entity = entity
          self.entity_id = entity_id


class DebtOutstandingError(DomainError):
     """Termination refused: the lease still has unsettled installments."""
     status_code = 400
     code = "DEBT_OUTSTANDING"

     def __init__(self, lease_id: int, open_count: int, outstanding: Decimal):
          super().__init__(
               f"Lease #{lease_id} cannot be terminated: {open_count} payment(s) "
               f"totalling {outstanding:.2f} are still pending or overdue"
          )
          self.lease_id = lease_id
          self.open_count = open_count
          self.outstanding = outstanding

     def to_body(self) -> dict:
          return {
               "message": self.message,
               "code": self.code,
               "openPayments": self.open_count,
               "outstandingAmount": f"{self.outstanding:.2f}",
          }


class PaymentConflictError(DomainError):
     """The payment was already settled (possibly by a concurrent request)."""
     status_code = 409


class BillingProviderError(DomainError):
     """The external billing provider refused the call or could not be reached."""
     status_code = 502

     def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
          super().__init__(message)
          self.provider_status = status_code
          self.details = details
