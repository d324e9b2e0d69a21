"""Gateway error taxonomy."""


class GatewayError(Exception):
    """Base class for esgateway errors."""


class BackendError(GatewayError):
    """Elasticsearch was unreachable or reported an error."""

    def __init__(self, message: str, index: str = ""):
        super().__init__(message)
        self.index = index


class ResponseShapeError(BackendError):
    """Elasticsearch answered, but not with the expected search envelope."""
