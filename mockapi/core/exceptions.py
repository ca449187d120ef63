# === mockapi/core/exceptions.py ===
from typing import Any, Dict


class MockServingError(Exception):
    """Base class for failures that end a single mock request."""

    status_code: int = 500
    error: str = "Internal server error"

    def payload(self) -> Dict[str, Any]:
        return {"error": self.error}


class EndpointNotFound(MockServingError):
    status_code = 404
    error = "Endpoint not found"

    def __init__(self, method: str, path: str):
        self.method = method
        self.path = path
        super().__init__(f"No {method} endpoint found at {path}")

    def payload(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "detail": f"No {self.method} endpoint found at {self.path} for this project",
        }


class KeyRequired(MockServingError):
    status_code = 401
    error = "API key required"


class KeyInvalid(MockServingError):
    status_code = 403
    error = "Invalid API key"


class StorageFailure(MockServingError):
    """The registry could not be queried. Details stay in the logs."""

    status_code = 500
    error = "Internal server error"


class UnservableStatus(MockServingError):
    """The stored status cannot be sent as a final response (1xx)."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, stored_status: int):
        self.stored_status = stored_status
        super().__init__(f"Status {stored_status} is not a final response status")
