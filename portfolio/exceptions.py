"""Error kinds raised across the portfolio package."""


class PortfolioError(Exception):
    """Base class for portfolio errors."""


class CatalogLoadError(PortfolioError):
    """The publication catalog could not be fetched or parsed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load catalog from {source}: {reason}")


class PublicationNotFound(PortfolioError):
    """No publication could be resolved for a preview session."""

    def __init__(self, pub_id=None):
        self.pub_id = pub_id
        super().__init__(f"Publication not found: {pub_id or '<none>'}")


class ValidationFailure(PortfolioError):
    """A download request is missing fields or is malformed.

    The message names the kind of problem, never the offending field.
    """

    status_code = 400
