import pytest

from fallback_chain.domain.errors import BodyEncodingError, ChainConfigurationError
from fallback_chain.domain.models import AttemptChain, AttemptNode
from fallback_chain.domain.services import AttemptBuilder, ChainDirector, ChainExecutor

from conftest import NOT_FOUND_PAYLOAD, BasicError, BasicResponse

PASS_PATH = "http://mock.test/get-basic"
FAIL_PATH_1 = "http://mock.test/fail-basic-post"
FAIL_PATH_2 = "http://mock.test/fail-basic"


class RecordingBuilder(AttemptBuilder):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.steps = []

    def create_attempt(self):
        self.steps.append("create")
        super().create_attempt()

    def add_body(self):
        self.steps.append("body")
        super().add_body()

    def add_headers(self):
        self.steps.append("headers")
        super().add_headers()

    def add_payloads(self):
        self.steps.append("payloads")
        super().add_payloads()

    def add_fallback(self):
        self.steps.append("fallback")
        super().add_fallback()


def test_fallback_builder(transport):
    transport.route("GET", PASS_PATH)
    basic_response, basic_error = BasicResponse(), BasicError()

    builder = AttemptBuilder("CONN1", "GET", PASS_PATH, True, None, None, basic_response, basic_error, None)
    ChainDirector().create_attempt(builder)

    result = ChainExecutor(transport).execute(builder.attempt)

    assert result.as_tuple() == (200, None)
    assert basic_response.text == "OK"
    assert basic_response.detail == "Successful HTTP request"


def test_built_attempt_matches_direct_construction(transport):
    transport.route("GET", PASS_PATH)
    built_output, direct_output = BasicResponse(), BasicResponse()
    built = ChainDirector().create_attempt(
        AttemptBuilder("CONN1", "GET", PASS_PATH, returns_json=True, output=built_output)
    )
    direct = AttemptNode("CONN1", "GET", PASS_PATH, headers={"Content-Type": "application/json"},
                         output=direct_output)

    for field in ("name", "method", "target", "body", "fallback", "error_target"):
        assert getattr(built, field) == getattr(direct, field)
    assert dict(built.headers) == dict(direct.headers)

    executor = ChainExecutor(transport)
    assert executor.execute(built).as_tuple() == executor.execute(direct).as_tuple() == (200, None)
    assert built_output == direct_output
    assert transport.calls[0] == transport.calls[1]


def test_complex_fallback_builder(transport):
    transport.route("GET", PASS_PATH)
    transport.route("POST", FAIL_PATH_2, 404, NOT_FOUND_PAYLOAD)
    transport.route("POST", FAIL_PATH_1, 404, NOT_FOUND_PAYLOAD)
    basic_response, basic_error = BasicResponse(), BasicError()
    director = ChainDirector()

    pass_builder = AttemptBuilder("PASS", "GET", PASS_PATH, True, None, None, basic_response, basic_error, None)
    director.create_attempt(pass_builder)

    fail_builder_2 = AttemptBuilder("FAIL2", "POST", FAIL_PATH_2, True, None, None,
                                    basic_response, basic_error, pass_builder.attempt)
    director.create_attempt(fail_builder_2)

    fail_builder_1 = AttemptBuilder("FAIL1", "POST", FAIL_PATH_1, True, None, None,
                                    basic_response, basic_error, fail_builder_2.attempt)
    director.create_attempt(fail_builder_1)

    result = ChainExecutor(transport).execute(fail_builder_1.attempt)

    assert result.as_tuple() == (200, None)
    assert result.served_by == "PASS"
    assert basic_response.text == "OK"


def test_json_default_header_is_injected():
    node = ChainDirector().create_attempt(AttemptBuilder("a", "GET", PASS_PATH, returns_json=True))

    assert dict(node.headers) == {"Content-Type": "application/json"}


def test_explicit_headers_replace_json_default():
    builder = AttemptBuilder("a", "GET", PASS_PATH, returns_json=True, headers={"Accept": "text/plain"})

    node = ChainDirector().create_attempt(builder)

    assert dict(node.headers) == {"Accept": "text/plain"}


def test_no_headers_without_json():
    node = ChainDirector().create_attempt(AttemptBuilder("a", "GET", PASS_PATH))

    assert dict(node.headers) == {}


def test_headers_are_read_only():
    node = ChainDirector().create_attempt(AttemptBuilder("a", "GET", PASS_PATH, returns_json=True))

    with pytest.raises(TypeError):
        node.headers["X-Other"] = "1"


def test_body_is_encoded_through_codec():
    builder = AttemptBuilder("a", "POST", PASS_PATH, returns_json=True, body={"query": "items", "limit": 2})

    node = ChainDirector().create_attempt(builder)

    assert node.body == b'{"query": "items", "limit": 2}'


def test_body_encoding_failure_aborts_the_attempt():
    builder = AttemptBuilder("a", "POST", PASS_PATH, body={"values": {1, 2}})

    with pytest.raises(BodyEncodingError):
        ChainDirector().create_attempt(builder)
    assert builder.attempt is None


def test_director_runs_steps_in_order():
    tail = AttemptNode("tail", "GET", PASS_PATH)
    full = RecordingBuilder("a", "POST", PASS_PATH, body={"x": 1}, fallback=tail)
    minimal = RecordingBuilder("b", "GET", PASS_PATH)
    director = ChainDirector()

    node = director.create_attempt(full)
    director.create_attempt(minimal)

    assert full.steps == ["create", "body", "headers", "payloads", "fallback"]
    assert minimal.steps == ["create", "headers", "payloads"]
    assert node.fallback is tail


def test_steps_require_a_created_attempt():
    with pytest.raises(ChainConfigurationError):
        AttemptBuilder("a", "GET", PASS_PATH).add_headers()


def test_create_chain_wires_attempts_in_order(transport, event_log):
    transport.route("GET", FAIL_PATH_2, 404, NOT_FOUND_PAYLOAD)
    transport.route("GET", PASS_PATH)
    output = BasicResponse()
    builders = [
        AttemptBuilder("first", "GET", "broken target", output=output, logger=event_log),
        AttemptBuilder("second", "GET", FAIL_PATH_2, output=output, logger=event_log),
        AttemptBuilder("third", "GET", PASS_PATH, returns_json=True, output=output, logger=event_log),
    ]

    chain = ChainDirector().create_chain(builders)

    assert chain.names == ("first", "second", "third")
    assert chain.nodes[0].fallback is chain.nodes[1]
    assert chain.nodes[1].fallback is chain.nodes[2]
    assert chain.nodes[2].fallback is None
    assert chain.head is builders[0].attempt

    result = ChainExecutor(transport).execute(chain)
    assert result.as_tuple() == (200, None)
    assert output.text == "OK"
    assert len(event_log.messages) == 2


def test_create_chain_keeps_the_last_builders_fallback():
    outer_tail = AttemptNode("outer", "GET", PASS_PATH)
    chain = ChainDirector().create_chain([
        AttemptBuilder("a", "GET", PASS_PATH, fallback=AttemptNode("ignored", "GET", PASS_PATH)),
        AttemptBuilder("b", "GET", PASS_PATH, fallback=outer_tail),
    ])

    assert chain.names == ("a", "b", "outer")
    assert chain.nodes[-1] is outer_tail


def test_create_chain_requires_builders():
    with pytest.raises(ChainConfigurationError):
        ChainDirector().create_chain([])


def test_chain_rejects_inconsistent_links():
    a = AttemptNode("a", "GET", PASS_PATH)
    b = AttemptNode("b", "GET", PASS_PATH)

    with pytest.raises(ChainConfigurationError):
        AttemptChain((a, b))
    with pytest.raises(ChainConfigurationError):
        AttemptChain(())


def test_create_chain_leaves_builders_fallback_untouched():
    ignored = AttemptNode("ignored", "GET", PASS_PATH)
    builders = [
        AttemptBuilder("a", "GET", PASS_PATH, fallback=ignored),
        AttemptBuilder("b", "GET", PASS_PATH),
    ]

    chain = ChainDirector().create_chain(builders)

    assert builders[0].fallback is ignored
    assert builders[1].fallback is None
    assert builders[0].attempt.fallback is chain.nodes[1]
    assert builders[1].attempt is chain.nodes[1]
