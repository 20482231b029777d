from typing import Any


class ApplicationError(Exception):
    """General application error"""

    http_code: int | None = None
    error_code: int
    error: str

    def __init__(self, details: Any | None = None, **extra: Any):
        self.error = self.error
        if details:
            self.error += f": {details}"
        # additional fields rendered next to error_code and error
        self.extra = extra
        super().__init__(self.error)

    def content(self) -> dict[str, Any]:
        return {"error_code": self.error_code, "error": self.error, **self.extra}
