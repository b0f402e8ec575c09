"""Tests for classified outcomes."""

import pytest

from load_test.outcome import (
    Outcome, OperationKind, OutcomeError,
    Success, TestFailure, Throttled, HttpError, OtherError, NotFound
)


def test_success_classification():
    outcome = Outcome(OperationKind.GET, Success())
    assert outcome.was_success
    assert not outcome.was_test_failure
    assert not outcome.was_error
    assert not outcome.was_5xx
    assert outcome.message == ''


def test_5xx_is_error_and_test_failure():
    outcome = Outcome(OperationKind.PUT, HttpError(503, 'unavailable'))
    assert outcome.was_5xx
    assert outcome.was_error
    assert outcome.was_test_failure
    assert not outcome.was_success
    assert outcome.message == 'unavailable'


def test_4xx_is_not_5xx():
    outcome = Outcome(OperationKind.PUT, HttpError(400, 'bad request'))
    assert not outcome.was_5xx
    assert outcome.was_error


def test_throttled_and_not_found_are_not_failures():
    assert Outcome(OperationKind.GET, Throttled()).was_throttled
    assert not Outcome(OperationKind.GET, Throttled()).was_test_failure
    assert Outcome(OperationKind.GET, NotFound()).was_not_found
    assert not Outcome(OperationKind.GET, NotFound()).was_test_failure


def test_other_error_and_test_failure():
    assert Outcome(OperationKind.DELETE, OtherError('timeout')).was_test_failure
    assert Outcome(OperationKind.DELETE, OtherError('timeout')).was_error
    assert Outcome(OperationKind.CONSISTENCY, TestFailure('stale')).was_test_failure
    assert not Outcome(OperationKind.CONSISTENCY, TestFailure('stale')).was_error


def test_outcome_is_immutable():
    outcome = Outcome(OperationKind.GET, Success())
    with pytest.raises(AttributeError):
        outcome.kind = OperationKind.PUT


def test_invalid_kind_or_status_rejected():
    with pytest.raises(OutcomeError):
        Outcome('GET', Success())
    with pytest.raises(OutcomeError):
        Outcome(OperationKind.GET, 'success')


def test_from_dict_http_error():
    outcome = Outcome.from_dict(
        {'kind': 'get', 'status': 'http_error', 'status_code': 502, 'message': 'bad gateway'}
    )
    assert outcome == Outcome(OperationKind.GET, HttpError(502, 'bad gateway'))


def test_from_dict_consistency_check_alias():
    outcome = Outcome.from_dict({'kind': 'consistency-check', 'status': 'success'})
    assert outcome.kind is OperationKind.CONSISTENCY


def test_to_dict_from_dict_preserves_fields():
    outcome = Outcome(OperationKind.CREATE, Throttled(503))
    data = outcome.to_dict()
    assert data == {'kind': 'CREATE', 'status': 'throttled', 'status_code': 503}
    assert Outcome.from_dict(data) == outcome


@pytest.mark.parametrize('data', [
    {'kind': 'PATCH', 'status': 'success'},
    {'kind': 'GET', 'status': 'exploded'},
    {'kind': 'GET', 'status': 'http_error', 'message': 'no code'},
    ['GET', 'success'],
])
def test_from_dict_rejects_bad_data(data):
    with pytest.raises(OutcomeError):
        Outcome.from_dict(data)


@pytest.mark.parametrize('status, code', [
    ('http_error', 'oops'),
    ('http_error', None),
    ('throttled', 'slow down'),
])
def test_from_dict_rejects_non_numeric_status_code(status, code):
    with pytest.raises(OutcomeError, match='status_code'):
        Outcome.from_dict({'kind': 'GET', 'status': status, 'status_code': code})
