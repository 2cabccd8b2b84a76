# devicehub/core/errors.py
"""
Domain error taxonomy.

  - ValidationError        bad field value (400)
  - ReferenceMissingError  a foreign key does not resolve (400)
  - DuplicateError         uniqueness conflict (409)
  - InvalidCredentials / InvalidOrExpiredToken  auth failures (401)
  - StorageFailureError    infrastructure fault, never leaks details (500)

"Not found" is not an exception: finds return None and writes
report zero affected rows.
"""
import logging

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

# SQLSTATE / driver codes reported for unique and primary key violations
_PG_UNIQUE_VIOLATION = "23505"
_MYSQL_DUP_ENTRY = 1062


class DeviceHubError(Exception):
    """Base class for all errors the transport layer maps to a response."""

    code = "ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(DeviceHubError):
    code = "VALIDATION_ERROR"
    http_status = 400

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field} {reason}")
        self.field = field
        self.reason = reason

    def to_response(self) -> dict:
        body = super().to_response()
        body["error"]["field"] = self.field
        return body


class NoFieldsProvidedError(ValidationError):
    code = "NO_FIELDS_PROVIDED"

    def __init__(self):
        DeviceHubError.__init__(self, "no fields to update")
        self.field = None
        self.reason = "no fields to update"


class ReferenceMissingError(DeviceHubError):
    code = "REFERENCE_MISSING"
    http_status = 400

    def __init__(self, field: str, entity: str):
        super().__init__(f"{field} does not reference an existing {entity}")
        self.field = field
        self.entity = entity

    def to_response(self) -> dict:
        body = super().to_response()
        body["error"]["field"] = self.field
        return body


class DuplicateError(DeviceHubError):
    code = "DUPLICATE"
    http_status = 409

    def __init__(self, message: str = "duplicate entry"):
        super().__init__(message)


class InvalidCredentialsError(DeviceHubError):
    code = "INVALID_CREDENTIALS"
    http_status = 401

    def __init__(self, message: str = "invalid credentials"):
        super().__init__(message)


class InvalidOrExpiredTokenError(DeviceHubError):
    code = "INVALID_TOKEN"
    http_status = 401

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class StorageFailureError(DeviceHubError):
    code = "STORAGE_FAILURE"
    http_status = 500

    def __init__(self, message: str = "storage failure"):
        super().__init__(message)


def is_unique_violation(exc: Exception) -> bool:
    """
    True if a DB-API error reports a unique / primary key violation.

    Checks, in order:
      - PostgreSQL SQLSTATE 23505 (psycopg `sqlstate`, psycopg2 `pgcode`)
      - MySQL errno 1062 (ER_DUP_ENTRY)
      - SQLite "UNIQUE constraint failed" message
    """
    if not isinstance(exc, IntegrityError):
        return False
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == _PG_UNIQUE_VIOLATION:
        return True
    args = getattr(orig, "args", ())
    if args and args[0] == _MYSQL_DUP_ENTRY:
        return True
    return "UNIQUE constraint failed" in str(orig)


def normalize_storage_error(exc: Exception) -> DeviceHubError:
    """
    Translate a storage-level exception into the domain taxonomy.

    Uniqueness violations become DuplicateError, everything else
    becomes a generic StorageFailureError.
    """
    if is_unique_violation(exc):
        return DuplicateError()
    logger.error("Storage failure: %s", exc)
    return StorageFailureError()
