import pytest
from thermolink.errors import TransportError
from thermolink.httpclient import HttpClient
from thermolink.remote import RemoteThermostatAPI

M = "http://cloud/measurements"; S = "http://cloud/status"

def build(session):
    return RemoteThermostatAPI(HttpClient(session=session), M, S)

@pytest.mark.parametrize("text", ["72.5", " 72.5\n", "t=22500", "ünïcode"])
def test_publish_posts_text_verbatim(session, text):
    session.reply()
    build(session).publish(text)
    assert len(session.calls) == 1
    method, url, kw = session.calls[0]
    assert (method, url) == ("POST", M)
    assert kw["data"].decode("utf-8") == text

@pytest.mark.parametrize("body,expected", [
    ("true", True), ("True", False), ("true ", False), ("true\n", False),
    ("", False), ("false", False), ('{"heat": true}', False),
])
def test_fetch_desired_state_exact_match(session, body, expected):
    session.reply(body)
    assert build(session).fetch_desired_state() is expected
    assert session.calls[0][:2] == ("GET", S)

def test_fetch_transport_error_propagates(session):
    session.fail()
    with pytest.raises(TransportError):
        build(session).fetch_desired_state()

def test_publish_does_not_retry(session):
    session.fail()
    with pytest.raises(TransportError):
        build(session).publish("72.5")
    assert len(session.calls) == 1

def test_publish_bytes_verbatim(session):
    session.reply()
    build(session).publish(b"\xff\xfe72.5")
    assert session.calls[0][2]["data"] == b"\xff\xfe72.5"

def test_fetch_compares_raw_bytes_under_unknown_charset(session):
    session.reply(b"true", encoding="x-bogus")
    assert build(session).fetch_desired_state() is True
