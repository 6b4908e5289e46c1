from __future__ import annotations


class SearchServiceError(Exception):
    """Caller-facing error rendered as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidQueryError(SearchServiceError):
    status_code = 400

    def __init__(self, message: str = "Query parameter is required") -> None:
        super().__init__(message)


class MissingCredentialError(SearchServiceError):
    status_code = 500

    def __init__(self, message: str = "API key not configured") -> None:
        super().__init__(message)


class UpstreamStatusError(RuntimeError):
    # Per-page failure; converted to a failed outcome inside the orchestrator.
    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"API responded with status {status_code}")
        self.status_code = status_code
        self.body = body
