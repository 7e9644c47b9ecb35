"""Error taxonomy for upstream lookups."""


class RoadwxError(Exception):
    """Base class for errors surfaced to callers."""


class UpstreamError(RoadwxError):
    """An upstream HTTP endpoint failed or returned an unusable body."""

    def __init__(
        self, message: str, *, status_code: int | None = None, url: str | None = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class NotFoundError(RoadwxError):
    """The geocoder returned no candidates for a query."""
