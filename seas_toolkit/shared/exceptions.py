"""
Exception hierarchy for the Sovereign Seas toolkit.

Exception Categories:
- RetryableException: Transient failures that may succeed on retry (RPC, network)
- NonRetryableException: Permanent failures that won't benefit from retry
- ConfigurationException: Startup/config errors that prevent operation

Concrete errors:
- NetworkError -> RetryableException (timeouts, refused connections)
- ServerError -> RetryableException (HTTP 5xx)
- ClientError -> NonRetryableException (HTTP 4xx, malformed request)
- ValidationError -> NonRetryableException (local input check, never sent)
- TransactionError -> NonRetryableException (write call failures)
    - ContractRevertError (the contract rejected the call)
    - UserRejectedError (the signer declined to sign)
"""

from typing import Optional


class RetryableException(Exception):
    """
    Base class for exceptions that may succeed on retry.

    Use for transient failures like:
    - RPC timeouts
    - Server side errors
    - Temporary network issues
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NonRetryableException(Exception):
    """
    Base class for exceptions that won't benefit from retry.

    Use for permanent failures like:
    - Invalid input data
    - Rejected requests
    - Contract reverts
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationException(NonRetryableException):
    """
    Exception for configuration/startup errors.

    Use when:
    - Required environment variables are missing
    - Invalid configuration values
    - Missing required resources
    """

    pass


class NetworkError(RetryableException):
    """
    Request never produced a usable response (timeout, connection error).

    ``status`` is always 0: the server was not reached or did not answer.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.status = 0


class ServerError(RetryableException):
    """HTTP 5xx response."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


class ClientError(NonRetryableException):
    """HTTP 4xx response. Retrying the same request cannot succeed."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


class ValidationError(NonRetryableException):
    """
    Local input validation failure.

    Raised before any network call is made, so the request never reaches
    the chain or the HTTP API.
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.reason = message


class TransactionError(NonRetryableException):
    """Generic write failure when the cause cannot be classified further."""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        super().__init__(message)
        self.tx_hash = tx_hash


class ContractRevertError(TransactionError):
    """The contract reverted the call. Message passed through verbatim."""

    pass


class UserRejectedError(TransactionError):
    """The signer declined the request (EIP-1193 code 4001)."""

    pass


class TransactionStateError(NonRetryableException):
    """Illegal transaction lifecycle transition."""

    pass
