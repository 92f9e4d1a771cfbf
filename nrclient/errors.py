"""Exceptions raised by the New Relic client."""

from __future__ import annotations

from collections.abc import Iterator


class NewRelicError(Exception):
    """Base class for every error the client raises."""


class APIError(NewRelicError):
    """An HTTP response with an error status code."""

    def __init__(self, status_code: int, body: str = "", message: str = "") -> None:
        super().__init__(status_code, body, message)
        self.status_code = status_code
        self.body = body
        self.message = message

    def __str__(self) -> str:
        detail = self.body or self.message
        return f"HTTP {self.status_code}: {detail}"

    def not_found(self) -> bool:
        """True when the server answered 404."""
        return self.status_code == 404

    def unauthorized(self) -> bool:
        """True when the server answered 401."""
        return self.status_code == 401


class ResponseError(NewRelicError):
    """A request could not be built or its response could not be understood."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message, cause)
        self.message = message
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class GraphQLError(NewRelicError):
    """NerdGraph answered with an error in its response body."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"GraphQL error: {self.message}"


class AccountIDRequiredError(NewRelicError):
    """The operation needs an account ID and none is configured."""

    def __init__(self, message: str = "account ID is required") -> None:
        super().__init__(message)


class NotFoundError(NewRelicError):
    """The requested resource does not exist."""

    def __init__(self, message: str = "resource not found") -> None:
        super().__init__(message)


def _chain(err: BaseException | None) -> Iterator[BaseException]:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = err.__cause__


def is_not_found(err: BaseException | None) -> bool:
    """Report whether the error, or one it was raised from, means "not found"."""
    return any(
        isinstance(e, NotFoundError) or (isinstance(e, APIError) and e.not_found())
        for e in _chain(err)
    )


def is_unauthorized(err: BaseException | None) -> bool:
    """Report whether the error, or one it was raised from, is an HTTP 401."""
    return any(isinstance(e, APIError) and e.unauthorized() for e in _chain(err))