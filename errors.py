"""Error types raised by the menu board components.

Each one carries the HTTP status it maps to; ``app.py`` turns them into
``{"error": message}`` JSON responses.
"""

import enum


class MenuBoardError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class AuthenticationFailure(MenuBoardError):
    """Submitted credentials did not match."""
    status_code = 401


class AuthorizationFailure(MenuBoardError):
    """A protected operation was called without an admin session."""
    status_code = 401

    def __init__(self, message='not authorized, log in first'):
        super().__init__(message)


class ValidationFailure(MenuBoardError):
    status_code = 400


class StorageFailure(MenuBoardError):
    """Reading or writing persisted state failed.

    The message is what the client sees; the underlying OSError is only logged.
    """
    status_code = 500


class MenuConstraint(enum.Enum):
    ITEM_COUNT = 'items'
    FEATURED_MISSING = 'featured'
    BEVERAGES_INVALID = 'beverages'


class MenuValidationError(ValidationFailure):
    def __init__(self, constraint, message):
        super().__init__(message)
        self.constraint = constraint
