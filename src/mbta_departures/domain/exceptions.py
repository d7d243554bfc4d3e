"""Domain exceptions for failures talking to the MBTA API."""


class MbtaApiError(RuntimeError):
    """A single MBTA API request failed.

    Covers transport errors, timeouts and non-2xx responses. Scoped to the
    stop whose request failed.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(MbtaApiError):
    """The MBTA API answered 429. Terminal for the whole run."""

    def __init__(self, message: str = "Rate limited") -> None:
        super().__init__(message, status_code=429)


class MalformedResponseError(MbtaApiError):
    """The response body could not be read as a JSON:API document."""
