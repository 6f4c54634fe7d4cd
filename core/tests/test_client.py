from datetime import date

import pytest
import requests

from core.client import ApiResult, HospitalClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text='', content_type='application/json', reason='OK'):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.headers = {'Content-Type': content_type}
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError('no json')
        return self._payload


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    def install(response):
        def fake_request(self, method, url, **kwargs):
            recorded.append((method, url, kwargs))
            if isinstance(response, Exception):
                raise response
            return response
        monkeypatch.setattr(requests.Session, 'request', fake_request)
        return recorded

    return install


def test_success_returns_data(calls):
    recorded = calls(FakeResponse(200, [{'id': 1}]))
    client = HospitalClient('http://api.local/')

    result = client.list_staff(department='Surgery')

    assert result == ApiResult(ok=True, status=200, data=[{'id': 1}])
    method, url, kwargs = recorded[0]
    assert (method, url) == ('GET', 'http://api.local/api/staff')
    assert kwargs['params'] == {'department': 'Surgery'}
    assert kwargs['timeout'] == 10


def test_unset_params_are_dropped_and_dates_serialised(calls):
    recorded = calls(FakeResponse(200, {}))
    HospitalClient('http://api.local').attendance_stats(date(2024, 6, 1))
    assert recorded[0][2]['params'] == {'date': '2024-06-01'}


def test_error_body_becomes_error_message(calls):
    calls(FakeResponse(409, {'error': 'Email already exists'}, reason='Conflict'))
    result = HospitalClient('http://api.local').create_staff(email='x@example.com')
    assert not result.ok
    assert result.status == 409
    assert result.error == 'Email already exists'


def test_error_without_json_uses_reason(calls):
    calls(FakeResponse(502, None, text='<html>bad gateway</html>', content_type='text/html', reason='Bad Gateway'))
    result = HospitalClient('http://api.local').revenue('week')
    assert (result.ok, result.status, result.error) == (False, 502, 'Bad Gateway')


def test_transport_failure_is_status_zero(calls):
    calls(requests.ConnectionError('refused'))
    result = HospitalClient('http://api.local').health()
    assert result.ok is False
    assert result.status == 0
    assert 'refused' in result.error


def test_csv_report_returned_as_text(calls):
    calls(FakeResponse(200, None, text='Date,Staff Name\n', content_type='text/csv'))
    result = HospitalClient('http://api.local').attendance_report()
    assert result.ok
    assert result.data == 'Date,Staff Name\n'


def test_payment_body_omits_unset_fields(calls):
    recorded = calls(FakeResponse(201, {'id': 7}))
    HospitalClient('http://api.local').record_payment(3, '12.50', 'Card')
    method, url, kwargs = recorded[0]
    assert (method, url) == ('POST', 'http://api.local/api/bills/3/payments')
    assert kwargs['json'] == {'amount': '12.50', 'paymentMethod': 'Card'}
