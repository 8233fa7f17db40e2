"""
Property-based tests for the port-43 WHOIS client.

The blocking socket call is replaced so no network access is needed.
"""

import asyncio
import string
from unittest.mock import patch

from hypothesis import given, settings
from hypothesis import strategies as st

from root_rdap.enums import FetchErrorCode
from root_rdap.whois_client import WhoisClient, WhoisResponse


tld_strategy = st.text(alphabet=string.ascii_lowercase, min_size=2, max_size=10)


class FakeSocket:
    """Socket double returning a canned response in small chunks."""

    def __init__(self, response: bytes, chunk_size: int = 7):
        self._chunks = [response[i:i + chunk_size] for i in range(0, len(response), chunk_size)]
        self.sent = b""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def sendall(self, data: bytes) -> None:
        self.sent += data

    def recv(self, size: int) -> bytes:
        return self._chunks.pop(0) if self._chunks else b""


class TestQueryProperty:
    """Responses are read to EOF; the query is the TLD plus CRLF."""

    @given(
        tld=tld_strategy,
        body=st.lists(st.text(alphabet=string.ascii_letters + ": .", max_size=40), max_size=10),
    )
    @settings(max_examples=100)
    def test_full_response_read(self, tld: str, body: list[str]) -> None:
        raw = "\n".join(body)
        sockets = []

        def create_connection(address, timeout=None):
            sock = FakeSocket(raw.encode("utf-8"))
            sockets.append((address, timeout, sock))
            return sock

        with patch("root_rdap.whois_client.socket.create_connection", create_connection):
            response = asyncio.run(WhoisClient(host="whois.example", timeout=3.0).query(tld))

        assert response.ok
        assert response.raw_response == raw
        assert response.lines() == raw.splitlines()
        address, timeout, sock = sockets[0]
        assert address == ("whois.example", 43)
        assert timeout == 3.0
        assert sock.sent == f"{tld}\r\n".encode("ascii")


class TestErrorProperty:
    """Socket failures come back as errors, never as exceptions."""

    def test_connection_refused(self, monkeypatch) -> None:
        def create_connection(address, timeout=None):
            raise ConnectionRefusedError("refused")

        monkeypatch.setattr("root_rdap.whois_client.socket.create_connection", create_connection)

        response = asyncio.run(WhoisClient().query("aaa"))

        assert not response.ok
        assert response.error.code == FetchErrorCode.NETWORK_ERROR
        assert response.lines() == []

    def test_timeout(self, monkeypatch) -> None:
        def create_connection(address, timeout=None):
            raise TimeoutError("timed out")

        monkeypatch.setattr("root_rdap.whois_client.socket.create_connection", create_connection)

        response = asyncio.run(WhoisClient(timeout=1.0).query("aaa"))

        assert not response.ok
        assert response.error.code in (FetchErrorCode.TIMEOUT, FetchErrorCode.NETWORK_ERROR)

    def test_empty_response_has_no_lines(self) -> None:
        assert WhoisResponse(tld="aaa", raw_response="").lines() == []
