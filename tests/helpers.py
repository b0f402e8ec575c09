"""Outcome builders and a fake clock shared by the tests."""

from load_test.outcome import (
    Outcome, OperationKind, Success, TestFailure, Throttled, HttpError, OtherError, NotFound
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def success(kind=OperationKind.GET):
    return Outcome(kind, Success())


def failure(kind=OperationKind.PUT, message='value mismatch'):
    return Outcome(kind, TestFailure(message))


def throttled(kind=OperationKind.GET):
    return Outcome(kind, Throttled())


def http_error(code=500, message='internal error', kind=OperationKind.GET):
    return Outcome(kind, HttpError(code, message))


def other_error(message='connection reset', kind=OperationKind.GET):
    return Outcome(kind, OtherError(message))


def not_found(kind=OperationKind.GET, message='no such key'):
    return Outcome(kind, NotFound(message))
