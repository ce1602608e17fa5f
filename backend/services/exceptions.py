"""
Service errors

Services raise these and never swallow them; the HTTP layer maps each kind
to a status code (see main.py).
"""


class NewspaperError(Exception):
    """Base class for all service-level failures"""


class NotFound(NewspaperError):
    """Article, comment, theme or user id has no record"""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} id not found - {entity_id}")


class IdentityRequired(NewspaperError):
    """Operation needs an authenticated viewer but none resolved"""

    def __init__(self, message: str = "Identity required but not found"):
        super().__init__(message)


class InvalidCredential(NewspaperError):
    """Credential present but could not be decoded or has expired"""


class ConcurrencyConflict(NewspaperError):
    """Storage detected a conflicting concurrent write"""
