"""
Error kinds raised while routing an introspection request.

Each kind carries the HTTP status it maps to, a human-readable message and
optional structured context (the offending path, parameter or value).
"""

from typing import Any, Dict


class PresentError(Exception):
    """Base for errors reported to the requester."""

    status = 500
    kind = "Internal Error"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        data = {'error': self.message, 'kind': self.kind, 'status': self.status}
        if self.context:
            data['context'] = dict(self.context)
        return data


class BadRequest(PresentError):
    """400 - query parameters are missing or malformed."""

    status = 400
    kind = "Bad Request"


class NotFound(PresentError):
    """404 - no resource or format matches the request path."""

    status = 404
    kind = "Not Found"
