class InvalidMeasurement(ValueError):
    """Raised when a body measurement cannot be used for a recommendation."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field} measurement is missing or invalid: {value!r}")


class PageFetchError(RuntimeError):
    """Raised when the product page could not be retrieved."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")
