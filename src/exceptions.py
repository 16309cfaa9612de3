"""Domain errors raised by services and mapped to HTTP responses by the API."""


class PortfiError(Exception):
    """Base class for errors that carry an HTTP status code."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ItemNotFoundError(PortfiError):
    status_code = 404


class NotAuthorizedError(PortfiError):
    status_code = 401


class TokenDecodeError(NotAuthorizedError):
    """The auth cookie is missing or cannot be decoded."""


class InvalidIdentifierError(PortfiError):
    status_code = 400


class InvalidRequestError(PortfiError):
    status_code = 400


class PortfolioAlreadyExistsError(PortfiError):
    status_code = 400


class ItemNotUpdatedError(PortfiError):
    status_code = 500


class ItemNotDeletedError(PortfiError):
    status_code = 500


class GitHubFetchError(PortfiError):
    status_code = 500


class RegistrationError(Exception):
    """Raised at startup when a repository or service binding cannot be built."""
