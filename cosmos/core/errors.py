"""Error kinds raised by the service layer and mapped to HTTP responses in main."""


class CosmosError(Exception):
    status_code = 500


class ValidationError(CosmosError):
    status_code = 400


class NotFoundError(CosmosError):
    status_code = 404


class UpstreamError(CosmosError):
    """The completion API failed (network, quota or malformed response)."""


class StorageError(CosmosError):
    """The database rejected or failed a statement."""
