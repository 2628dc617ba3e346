from __future__ import annotations


class ReviewFormsError(ValueError):
    """Base class for input problems reported back to the caller."""


class InvalidUploadError(ReviewFormsError):
    pass


class NoEligibleSheetsError(ReviewFormsError):
    pass
