class ServiceError(Exception):
    """Base exception for all service-layer errors."""

    def __init__(self, detail: str, status_code: int = 500):
        self.detail = detail
        self.status_code = status_code
        super().__init__(self.detail)


class NotFoundError(ServiceError):
    """Raised when a requested resource is not found."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(detail, status_code=404)


class UnknownFieldError(NotFoundError):
    """Raised when a plugin settings field key is not part of the catalog."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Plugin settings field '{key}' does not exist")
