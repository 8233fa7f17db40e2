"""
WHOIS client for the IANA root zone database.

Sends ``<tld>\\r\\n`` to the port-43 service at ``whois.iana.org`` and
returns the raw response text. Failures are reported in the response, not
raised, so a single unreachable TLD never stops the run.
"""

import asyncio
import socket
from dataclasses import dataclass
from typing import Optional

from .enums import FetchErrorCode

DEFAULT_WHOIS_HOST = "whois.iana.org"
DEFAULT_WHOIS_PORT = 43
DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass
class WhoisError:
    """Error information from a WHOIS query."""

    code: FetchErrorCode
    message: str


@dataclass
class WhoisResponse:
    """Response from a WHOIS query."""

    tld: str
    raw_response: Optional[str]
    error: Optional[WhoisError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def lines(self) -> list[str]:
        return self.raw_response.splitlines() if self.raw_response else []


class WhoisClient:
    """Async wrapper around a blocking port-43 query."""

    def __init__(
        self,
        host: str = DEFAULT_WHOIS_HOST,
        port: int = DEFAULT_WHOIS_PORT,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """
        Initialize the WHOIS client.

        Args:
            host: WHOIS server hostname
            port: WHOIS server port
            timeout: Socket timeout in seconds
        """
        self._host = host
        self._port = port
        self._timeout = timeout

    async def query(self, tld: str) -> WhoisResponse:
        """
        Query the WHOIS server for a TLD.

        Args:
            tld: The TLD to look up, without a leading dot

        Returns:
            WhoisResponse with the raw text, or an error
        """
        try:
            raw_response = await self._execute_whois_query(tld)
            return WhoisResponse(tld=tld, raw_response=raw_response)
        except asyncio.TimeoutError:
            return WhoisResponse(
                tld=tld,
                raw_response=None,
                error=WhoisError(
                    code=FetchErrorCode.TIMEOUT,
                    message=f"WHOIS query timed out after {self._timeout}s",
                ),
            )
        except OSError as e:
            return WhoisResponse(
                tld=tld,
                raw_response=None,
                error=WhoisError(
                    code=FetchErrorCode.NETWORK_ERROR,
                    message=f"Socket error: {e}",
                ),
            )

    async def _execute_whois_query(self, tld: str) -> str:
        """
        Execute the actual WHOIS query via socket.

        Args:
            tld: TLD to query

        Returns:
            Raw WHOIS response as string
        """
        loop = asyncio.get_running_loop()

        def _sync_query() -> str:
            with socket.create_connection((self._host, self._port), timeout=self._timeout) as sock:
                sock.sendall(f"{tld}\r\n".encode("ascii"))

                response_parts: list[bytes] = []
                while True:
                    data = sock.recv(4096)
                    if not data:
                        break
                    response_parts.append(data)

                return b"".join(response_parts).decode("utf-8", errors="replace")

        return await asyncio.wait_for(
            loop.run_in_executor(None, _sync_query),
            timeout=self._timeout * 2,
        )
