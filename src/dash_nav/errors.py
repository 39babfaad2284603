"""Error kinds raised by the geocoder and router clients."""


class NavigationError(Exception):
    """Base class for collaborator failures surfaced to the navigation session."""

    kind = "NavigationError"
    retryable = False

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind


class InvalidQuery(NavigationError):
    """Query too short to search for. Raised before any request is made."""

    kind = "InvalidQuery"


class NoResults(NavigationError):
    """Both the biased and the broad search came back empty."""

    kind = "NoResults"


class NetworkError(NavigationError):
    """Collaborator unreachable, timed out, or answered with garbage."""

    kind = "NetworkError"
    retryable = True


class RouteNotFound(NavigationError):
    """The routing service found no viable path to the destination."""

    kind = "RouteNotFound"
