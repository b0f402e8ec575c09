#!/usr/bin/env python3
"""
Classified Outcomes
The unit of work produced by load-test workers and consumed by the aggregator
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Union
import logging

logger = logging.getLogger(__name__)


class OutcomeError(Exception):
    """Custom exception for malformed outcome data"""
    pass


class OperationKind(Enum):
    """Kind of operation a worker performed"""
    GET = 'GET'
    PUT = 'PUT'
    CREATE = 'CREATE'
    DELETE = 'DELETE'
    CONSISTENCY = 'CONSISTENCY'


@dataclass(frozen=True)
class Success:
    """Operation completed and passed its check"""
    pass


@dataclass(frozen=True)
class TestFailure:
    """Operation completed but its assertion failed"""
    __test__ = False

    message: str = ''


@dataclass(frozen=True)
class Throttled:
    """Server asked the client to back off"""
    status_code: int = 429


@dataclass(frozen=True)
class HttpError:
    """Non-2xx response that is neither a throttle nor a 404"""
    status_code: int
    message: str = ''


@dataclass(frozen=True)
class OtherError:
    """Client or transport error with no HTTP response"""
    message: str = ''


@dataclass(frozen=True)
class NotFound:
    """404 response"""
    message: str = ''


OutcomeStatus = Union[Success, TestFailure, Throttled, HttpError, OtherError, NotFound]

_STATUS_TYPES = {
    'success': Success,
    'test_failure': TestFailure,
    'throttled': Throttled,
    'http_error': HttpError,
    'other_error': OtherError,
    'not_found': NotFound,
}
_STATUS_NAMES = {cls: name for name, cls in _STATUS_TYPES.items()}


@dataclass(frozen=True)
class Outcome:
    """
    Result of one completed load-test operation

    Exactly one status applies per outcome. The was_* properties are derived
    classifications and are not mutually exclusive: a 503 HttpError is a
    5xx, an error and a test failure at the same time.
    """

    kind: OperationKind
    status: OutcomeStatus

    def __post_init__(self):
        if not isinstance(self.kind, OperationKind):
            raise OutcomeError(f"Invalid operation kind: {self.kind!r}")
        if type(self.status) not in _STATUS_NAMES:
            raise OutcomeError(f"Invalid outcome status: {self.status!r}")

    @property
    def was_success(self) -> bool:
        return isinstance(self.status, Success)

    @property
    def was_test_failure(self) -> bool:
        return isinstance(self.status, (TestFailure, HttpError, OtherError))

    @property
    def was_throttled(self) -> bool:
        return isinstance(self.status, Throttled)

    @property
    def was_5xx(self) -> bool:
        return isinstance(self.status, HttpError) and 500 <= self.status.status_code < 600

    @property
    def was_not_found(self) -> bool:
        return isinstance(self.status, NotFound)

    @property
    def was_error(self) -> bool:
        return isinstance(self.status, (HttpError, OtherError))

    @property
    def message(self) -> str:
        """Diagnostic message carried by the status, empty if none"""
        return getattr(self.status, 'message', '')

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'kind': self.kind.value,
            'status': _STATUS_NAMES[type(self.status)],
        }
        for field_name in ('status_code', 'message'):
            if hasattr(self.status, field_name):
                data[field_name] = getattr(self.status, field_name)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Outcome':
        """
        Build an outcome from a dictionary

        Args:
            data: Dictionary with keys 'kind', 'status' and, depending on the
                status, 'status_code' and 'message'

        Returns:
            Outcome instance

        Raises:
            OutcomeError: If the kind or status is unknown or a field is missing

        Example:
            >>> Outcome.from_dict({'kind': 'GET', 'status': 'http_error',
            ...                    'status_code': 503, 'message': 'unavailable'})
            Outcome(kind=<OperationKind.GET: 'GET'>, status=HttpError(status_code=503, message='unavailable'))
        """
        if not isinstance(data, dict):
            raise OutcomeError(f"Outcome must be a dict, got {type(data).__name__}")

        kind_name = str(data.get('kind', '')).upper().replace('-', '_')
        if kind_name == 'CONSISTENCY_CHECK':
            kind_name = 'CONSISTENCY'
        try:
            kind = OperationKind(kind_name)
        except ValueError:
            raise OutcomeError(
                f"Unknown operation kind: '{data.get('kind')}'. "
                f"Available kinds: {', '.join(k.value for k in OperationKind)}"
            )

        status_name = data.get('status')
        status_cls = _STATUS_TYPES.get(status_name)
        if status_cls is None:
            raise OutcomeError(
                f"Unknown outcome status: '{status_name}'. "
                f"Available statuses: {', '.join(_STATUS_TYPES.keys())}"
            )

        kwargs = {}
        if status_cls is HttpError and 'status_code' not in data:
            raise OutcomeError("http_error outcome missing 'status_code' field")
        if status_cls in (HttpError, Throttled) and 'status_code' in data:
            try:
                kwargs['status_code'] = int(data['status_code'])
            except (TypeError, ValueError):
                raise OutcomeError(f"Invalid status_code: {data['status_code']!r}")
        if status_cls not in (Success, Throttled):
            kwargs['message'] = str(data.get('message', ''))

        return cls(kind=kind, status=status_cls(**kwargs))
