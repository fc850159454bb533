"""
Base HTTP client for the Yousign API.

Handles session management, request validation, logging and error handling.
Requests are sent once: there is no retry layer and no timeout beyond what
requests itself applies.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Protocol

import requests

from .. import __version__
from ..config import SessionConfig
from ..exceptions import (
    AuthenticationError,
    ClientRequestError,
    NotFoundError,
    PermissionDeniedError,
    RequestError,
    TransportError,
)

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "POST", "PUT", "HEAD", "DELETE", "PATCH", "OPTIONS")

DEFAULT_LOGGER_NAME = "yousign_client.client"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class LoggerLike(Protocol):
    """What the client needs from an injected logger."""

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


def create_default_logger(log_file: Optional[str] = None) -> logging.Logger:
    """
    Create the logger used when none is injected.

    Args:
        log_file: Write to this file instead of stderr

    Returns:
        Logger with a single handler attached
    """
    default_logger = logging.getLogger(DEFAULT_LOGGER_NAME)

    if not default_logger.handlers:
        handler: logging.Handler
        if log_file:
            handler = logging.FileHandler(log_file, encoding="utf-8")
        else:
            handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        default_logger.addHandler(handler)
        default_logger.setLevel(logging.DEBUG)
        # keep records off the root handlers the CLI installs
        default_logger.propagate = False

    return default_logger


class HTTPClient:
    """
    Base HTTP client for the Yousign API.

    Handles:
    - Session management
    - Authentication headers
    - Request precondition checks
    - Error response handling and logging

    A requests.Session is not guaranteed to be thread-safe; sharing one
    client across threads is the caller's responsibility.
    """

    def __init__(
        self,
        config: SessionConfig,
        logger: Optional[LoggerLike] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            config: Validated session configuration
            logger: Optional logger; a default one is created on first use
            session: Optional pre-built requests session
        """
        self.config = config
        self._logger = logger
        self._session = session

    @property
    def logger(self) -> LoggerLike:
        """Get the injected logger, creating the default one if needed."""
        if self._logger is None:
            self._logger = create_default_logger(self.config.log_file)
        return self._logger

    @logger.setter
    def logger(self, value: LoggerLike) -> None:
        self._logger = value

    @property
    def session(self) -> requests.Session:
        """Get or create the HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({
                "User-Agent": f"yousign-client/{__version__}",
                "Accept": "application/json",
            })
        return self._session

    @property
    def base_url(self) -> str:
        """Get the base URL for API requests."""
        return self.config.base_url

    @staticmethod
    def _check_method(method: Any) -> str:
        if not isinstance(method, str) or method.upper() not in ALLOWED_METHODS:
            raise RequestError(f"The request's method is an unknown method: {method!r}")
        return method.upper()

    @staticmethod
    def _check_path(path: Any) -> str:
        if not isinstance(path, str) or not path.startswith("/") or len(path) <= 1:
            raise RequestError(f"The request's path is an invalid path: {path!r}")
        return path

    @staticmethod
    def _check_arguments(query: Any, body: Any, extra_headers: Any) -> None:
        if not isinstance(query, Mapping):
            raise RequestError("The request's query is an invalid argument (mapping expected).")
        if not isinstance(body, str):
            raise RequestError("The request's body is an invalid argument (string expected).")
        if not isinstance(extra_headers, Mapping):
            raise RequestError("The request's headers are an invalid argument (mapping expected).")

    def _get_headers(self, extra_headers: Mapping[str, str]) -> Dict[str, str]:
        """Get request headers; extra headers win over the defaults."""
        headers = self.config.default_headers
        headers.update(extra_headers)
        return headers

    def _client_error(self, response: requests.Response) -> ClientRequestError:
        """Build the exception matching a non-success response."""
        status = response.status_code
        body = response.text

        if status == 401:
            return AuthenticationError(
                "Authentication failed: please check your API key.",
                status_code=status,
                response_body=body,
            )
        elif status == 403:
            return PermissionDeniedError(
                "Permission denied: you don't have access to this resource.",
                status_code=status,
                response_body=body,
            )
        elif status == 404:
            return NotFoundError(
                "Resource not found: the requested resource does not exist.",
                status_code=status,
                response_body=body,
            )
        return ClientRequestError(
            f"API request failed with status {status}",
            status_code=status,
            response_body=body,
        )

    def _parse_response(self, response: requests.Response) -> Any:
        """Decode a JSON response; an empty body decodes to None."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            self.logger.error(
                "An error occurred (send@HTTPClient): response is not valid JSON: %s",
                response.text,
            )
            raise

    def send(
        self,
        method: str,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: str = "",
        extra_headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Make an API request.

        Args:
            method: HTTP method (case-insensitive)
            path: API path starting with '/'
            query: Query parameters
            body: Request body, already serialized
            extra_headers: Headers merged over the defaults

        Returns:
            Parsed JSON response, or None for an empty body

        Raises:
            RequestError: If an argument is malformed
            ClientRequestError: If the server answered with an error status
            TransportError: If the request could not be completed
        """
        if query is None:
            query = {}
        if extra_headers is None:
            extra_headers = {}

        method = self._check_method(method)
        self._check_path(path)
        self._check_arguments(query, body, extra_headers)

        url = f"{self.base_url}{path}"
        headers = self._get_headers(extra_headers)

        logger.debug(f"Request: {method} {url}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=dict(query) or None,
                data=body.encode("utf-8") if body else None,
                headers=headers,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            failed = e.response if e.response is not None else response
            self.logger.error(
                "An error occurred (send@HTTPClient): %s %s returned %s: %s",
                method,
                path,
                failed.status_code,
                failed.text,
            )
            raise self._client_error(failed) from e
        except requests.exceptions.RequestException as e:
            self.logger.error(
                "An error occurred (send@HTTPClient): %s %s failed: %s",
                method,
                path,
                e,
            )
            raise TransportError(f"Request failed: {e}") from e
        except Exception:
            self.logger.exception(
                "An unexpected error occurred (send@HTTPClient): %s %s",
                method,
                path,
            )
            raise

        logger.debug(f"Response: {response.status_code}")

        return self._parse_response(response)

    def send_json(
        self,
        method: str,
        path: str,
        payload: Dict[str, Any],
        query: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Serialize a body mapping to JSON and send it."""
        return self.send(method, path, query=query, body=json.dumps(payload))

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
