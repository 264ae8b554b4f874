"""Stand-ins for ``requests`` sessions used by the Discord client tests."""

import requests


class StubResponse:
    def __init__(self, status_code, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self._text = text

    def json(self):
        if self._text is not None:
            raise requests.exceptions.JSONDecodeError('Expecting value', self._text, 0)
        return self._payload


class StubSession:
    """Records calls and replays queued responses (or raises queued exceptions)."""

    def __init__(self, responses):
        self.headers = {}
        self.calls = []
        self._responses = list(responses)

    def _next(self):
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append((method, url, timeout, kwargs))
        return self._next()

    def get(self, url, timeout=None):
        self.calls.append(('GET', url, timeout, {}))
        return self._next()
