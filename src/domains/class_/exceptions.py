# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class domain exceptions.

Each error carries the machine-readable code and HTTP status the API
boundary uses to build the error envelope.
"""


class ClassServiceError(Exception):
    """Base exception for class domain errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
        status_code: HTTP status the API should answer with.
    """

    code = "CLASS_ERROR"
    status_code = 400

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ClassValidationError(ClassServiceError):
    """Raised when required class fields are missing or malformed."""

    code = "MISSING_REQUIRED_FIELDS"
    status_code = 400


class ClassNotFoundError(ClassServiceError):
    """Raised when class is not found."""

    code = "CLASS_NOT_FOUND"
    status_code = 404


class HasDependentsError(ClassServiceError):
    """Raised when deleting a class that still has students assigned.

    Attributes:
        student_count: Number of students blocking the deletion.
    """

    code = "CLASS_HAS_STUDENTS"
    status_code = 400

    def __init__(self, message: str, student_count: int) -> None:
        super().__init__(message)
        self.student_count = student_count
