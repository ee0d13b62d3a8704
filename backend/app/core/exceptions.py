"""
Resource store error types
"""
from typing import Any, Dict, Optional


class ResourceError(Exception):
    """Base class for resource store failures"""

    status_code = 500

    def __init__(self, resource_id: str, message: Optional[str] = None):
        self.resource_id = resource_id
        self.message = message or self.default_message()
        super().__init__(self.message)

    def default_message(self) -> str:
        return f"Resource {self.resource_id} could not be processed"

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary"""
        return {
            "detail": self.message,
            "type": type(self).__name__,
            "resource_id": self.resource_id,
        }


class ResourceNotFoundError(ResourceError):
    """The resource does not exist (or no longer exists) in the store"""

    status_code = 404

    def default_message(self) -> str:
        return f"Resource {self.resource_id} not found"


class ResourceConflictError(ResourceError):
    """A resource with the same identifier already exists"""

    status_code = 400

    def default_message(self) -> str:
        return f"Resource {self.resource_id} already exists"


class StoreDeleteFailedError(ResourceError):
    """The store could not delete the resource"""

    def default_message(self) -> str:
        return f"Failed to delete resource {self.resource_id}"
