class GoldPriceException(Exception):
    pass


class FetchError(GoldPriceException):
    """A single GET failed on every attempt."""

    def __init__(self, url: str, reason: str, status_code: int | None = None, attempts: int = 1):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        self.attempts = attempts
        super().__init__(reason)


class ParseError(GoldPriceException):
    pass


class ValidationError(GoldPriceException):
    pass


class AggregationError(GoldPriceException):
    pass
