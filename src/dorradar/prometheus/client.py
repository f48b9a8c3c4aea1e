"""HTTP transport to the metrics store."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

import requests

from ..core.exceptions import TransportError
from ..core.limits import MAX_TIMEOUT

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


class PrometheusClient:
    """Sends prepared queries to Prometheus. Failures are not retried.

    Without an injected session every ``fetch`` opens and closes its own
    ``requests.Session``, so one client can serve concurrent requests. An
    injected session is used as-is and must not be shared across threads.
    """

    def __init__(self, timeout: float = MAX_TIMEOUT, session: requests.Session | None = None):
        self.timeout = min(timeout, MAX_TIMEOUT)
        self.session = session

    def fetch(self, request: requests.PreparedRequest) -> bytes:
        """Send ``request`` and return the raw response body.

        ``self.timeout`` bounds the whole exchange, headers and body. The
        exchange runs on a worker thread; once the deadline passes the caller
        gets a TransportError and the response is closed underneath the worker.

        Non-2xx replies are returned as-is: Prometheus reports query
        failures in the body, which the response parser turns into errors.
        """
        if self.session is not None:
            return self._fetch(self.session, request)
        with requests.Session() as session:
            return self._fetch(session, request)

    def _fetch(self, session: requests.Session, request: requests.PreparedRequest) -> bytes:
        deadline = time.monotonic() + self.timeout
        inflight: list[requests.Response] = []

        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self._exchange, session, request, deadline, inflight)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError as e:
            logger.warning("Prometheus response not complete within %ss", self.timeout)
            for response in inflight:
                response.close()
            raise TransportError(f"Request timed out after {self.timeout}s") from e
        finally:
            executor.shutdown(wait=False)

    def _exchange(
        self,
        session: requests.Session,
        request: requests.PreparedRequest,
        deadline: float,
        inflight: list[requests.Response],
    ) -> bytes:
        try:
            response = session.send(request, timeout=self.timeout, stream=True)
        except requests.Timeout as e:
            logger.warning("Prometheus did not answer within %ss", self.timeout)
            raise TransportError(f"Request timed out after {self.timeout}s", str(e)) from e
        except requests.RequestException as e:
            logger.warning("Error querying Prometheus: %s", e)
            raise TransportError("Error querying Prometheus", str(e)) from e

        inflight.append(response)
        try:
            chunks: list[bytes] = []
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise TransportError(f"Response not complete after {self.timeout}s")
        except requests.RequestException as e:
            logger.warning("Error reading Prometheus response: %s", e)
            raise TransportError("Error reading response", str(e)) from e
        finally:
            response.close()

        body = b"".join(chunks)
        logger.debug("Prometheus answered %s (%d bytes)", response.status_code, len(body))
        return body
