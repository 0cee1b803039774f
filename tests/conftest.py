from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

import pytest

from fallback_chain.domain.errors import TransportError
from fallback_chain.domain.models import TransportResponse

OK_PAYLOAD = b'{"Text": "OK", "Detail": "Successful HTTP request"}'
NOT_FOUND_PAYLOAD = b'{"Code": 404, "Message": "Not Found"}'


@dataclass
class BasicResponse:
    text: str = ''
    detail: str = ''


@dataclass
class BasicError:
    code: int = 0
    message: str = ''


class ScriptedTransport:
    """Fake transport answering from a (method, target) -> response table.

    Unknown routes behave like an unreachable host.
    """

    def __init__(self, routes: Optional[Dict[Tuple[str, str], Union[TransportResponse, Exception]]] = None):
        self.routes = dict(routes or {})
        self.calls: List[dict] = []
        self.closed = False

    def route(self, method: str, target: str, status_code: int = 200, payload: bytes = OK_PAYLOAD):
        self.routes[(method, target)] = TransportResponse(status_code, payload)
        return self

    def fail(self, method: str, target: str, error: Optional[Exception] = None):
        self.routes[(method, target)] = error or TransportError(f"connection refused: {target}")
        return self

    def send(self, method, target, body=None, headers=None):
        self.calls.append({'method': method, 'target': target, 'body': body, 'headers': dict(headers or {})})
        answer = self.routes.get((method, target))
        if answer is None:
            raise TransportError(f"unreachable: {target}")
        if isinstance(answer, Exception):
            raise answer
        return answer

    def called(self, target: str) -> bool:
        return any(call['target'] == target for call in self.calls)

    def close(self):
        self.closed = True


class ListLogger:
    def __init__(self):
        self.messages: List[str] = []

    def log(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def transport():
    return ScriptedTransport()


@pytest.fixture
def event_log():
    return ListLogger()
