"""
HTTPS transport to the Avalara GetTax endpoint.
One POST per call, no retries.
"""
import logging
from typing import NamedTuple, Optional

import httpx

from avalara_tax import __version__
from avalara_tax.core.config import ClientConfig
from avalara_tax.core.exceptions import TransportError, TransportErrorKind
from avalara_tax.utils.decorators import performance_context


logger = logging.getLogger(__name__)
wire_logger = logging.getLogger('avalara.wire')

USER_AGENT = f'python/avalara-tax/{__version__}'


class TransportResponse(NamedTuple):
    status_code: int
    body: bytes


class HttpTransport:
    """
    Sends encoded GetTax requests.

    The underlying httpx.Client is created once and reused; it is safe to share
    between threads.
    """

    def __init__(self, config: ClientConfig,
                 transport: Optional[httpx.BaseTransport] = None):
        """
        Args:
            config: Client configuration (endpoint, credentials, timeout)
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self.config = config
        self.url = config.url
        self._http = httpx.Client(
            auth=httpx.BasicAuth(config.user_name, config.password),
            timeout=httpx.Timeout(config.request_timeout),
            headers={'User-Agent': USER_AGENT},
            transport=transport,
        )

    def close(self):
        self._http.close()

    def send(self, body: bytes, content_type: str) -> TransportResponse:
        """
        POST a request body to the tax endpoint.

        Args:
            body: Encoded request
            content_type: Media type of the encoding

        Returns:
            TransportResponse for a 2xx reply

        Raises:
            TransportError: On timeout, network failure or a non-2xx status
        """
        headers = {
            'Content-Type': content_type,
            'Content-Length': str(len(body)),
        }

        if self.config.debug:
            wire_logger.info(f"Request to Avalara: POST {self.url}\n{body.decode('utf-8', 'replace')}")

        try:
            with performance_context("GetTax round trip"):
                response = self._http.post(self.url, content=body, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(
                f"Timed out after {self.config.request_timeout}s calling {self.url}"
            )
            raise TransportError(
                f"Request to {self.url} timed out after {self.config.request_timeout}s",
                kind=TransportErrorKind.TIMEOUT
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Failed to reach {self.url}: {e}")
            raise TransportError(
                f"Request to {self.url} failed: {str(e)}",
                kind=TransportErrorKind.NETWORK
            ) from e

        if self.config.debug:
            wire_logger.info(
                f"Response from Avalara: {response.status_code}\n"
                f"{response.content.decode('utf-8', 'replace')}"
            )

        if not response.is_success:
            status_line = f"{response.status_code} {response.reason_phrase}".strip()
            logger.error(f"Failed to fetch tax response: {status_line}")
            raise TransportError(
                f"Failed to fetch tax response: {status_line}",
                kind=TransportErrorKind.HTTP_STATUS,
                status_code=response.status_code,
                body=response.content
            )

        return TransportResponse(response.status_code, response.content)
