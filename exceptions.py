# Exception types raised by the capture pipeline


class ReplicaError(Exception):
    """Base class for every failure surfaced by a capture run."""
    pass


class InvalidUrlError(ReplicaError, ValueError):
    """Raised before any network work when the page address does not parse."""

    def __init__(self, url):
        self.url = url
        super().__init__(f"Please enter a valid URL: {url!r}")


class FetchError(ReplicaError):
    """
    Raised when a resource could not be retrieved directly nor through the relay.
    Carries the target URL and the last status code (None for network errors).
    """

    def __init__(self, url, status=None, reason=None):
        self.url = url
        self.status = status
        self.reason = reason
        detail = f"status {status}" if status is not None else "network error"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(f"Failed to fetch {url} ({detail})")


class PageFetchError(FetchError):
    """The page under capture itself could not be fetched; the run is aborted."""

    @classmethod
    def from_fetch_error(cls, error):
        return cls(error.url, status=error.status, reason=error.reason)
