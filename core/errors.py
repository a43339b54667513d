# =============================================================================
# core/errors.py  —  The one error type the fetch layer knows about
# =============================================================================
#
# RunnClient turns every non-2xx HTTP response into a RunnAPIError.  The retry
# logic in core/pagination.py only looks at `status_code` and `retry_after`,
# so core/ stays free of any HTTP library.
# =============================================================================

from typing import Optional


class RunnAPIError(Exception):
    """A non-successful response from the Runn API."""

    def __init__(
        self,
        status_code: int,
        message: str = "",
        retry_after: Optional[float] = None,
    ) -> None:
        self.status_code = status_code
        self.message = message or f"HTTP {status_code}"
        self.retry_after = retry_after
        super().__init__(f"Runn API error {status_code}: {self.message}")

    @property
    def is_retryable(self) -> bool:
        """429 (rate limited) and 5xx are transient; everything else is final."""
        return self.status_code == 429 or self.status_code >= 500
