import pytest
import requests

import influxrest


class CountingResponse(requests.Response):
    """A real requests.Response with a canned body that counts close() calls."""

    def __init__(self, status_code=200, body=b"", headers=None):
        super().__init__()
        self.status_code = status_code
        if isinstance(body, str):
            body = body.encode()
        self._content = body
        self._content_consumed = True
        self.encoding = "utf-8"
        self.headers.update(headers or {})
        self.close_count = 0

    def close(self):
        self.close_count += 1
        super().close()


class FakeSession:
    """Stands in for requests.Session, records every request it is given."""

    def __init__(self):
        self.requests = []
        self.queued = []
        self.returned = []
        self.error = None

    def respond(self, status_code=200, body=b"", headers=None):
        res = CountingResponse(status_code, body, headers)
        self.queued.append(res)
        return res

    def request(self, method, url, json=None):
        self.requests.append({"method": method, "url": url, "json": json})
        if self.error is not None:
            raise self.error
        res = self.queued.pop(0) if self.queued else CountingResponse()
        self.returned.append(res)
        return res

    @property
    def last(self):
        return self.requests[-1]

    def last_payload(self):
        return self.last["json"]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return influxrest.Client(database="testdb", session=session)
