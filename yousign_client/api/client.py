"""
Yousign API Client - Main facade for all API operations.

Operations are organized into domain-specific modules; this facade exposes
them both as sub-clients and as flat methods named after the HTTP verb.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from ..config import SessionConfig
from ._http import HTTPClient, LoggerLike
from .users import UsersAPI
from .procedures import ProceduresAPI
from .members import MembersAPI
from .files import FilesAPI
from .file_objects import FileObjectsAPI


class YousignClient:
    """
    Client for the Yousign REST API.

    Every method validates its arguments, sends one request and returns the
    decoded JSON as-is. Nothing is cached between calls.

    Usage (production):
        client = YousignClient({"api_key": "YOUR_API_KEY"})
        users = client.get_users()

    Usage (staging):
        client = YousignClient({"api_key": "YOUR_STAGING_KEY", "is_testing": True})
        procedure = client.procedures.create("Contract", start=False)

    The underlying requests.Session is not guaranteed to be thread-safe;
    callers sharing a client between threads must serialize access.
    """

    def __init__(
        self,
        config: Union[SessionConfig, Mapping[str, Any]],
        logger: Optional[LoggerLike] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the API client.

        Args:
            config: Session configuration or a mapping with 'api_key' and
                optional 'is_testing' / 'log_file'
            logger: Optional logger; a default one is created on first use
            session: Optional requests session

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        if not isinstance(config, SessionConfig):
            config = SessionConfig.from_dict(config)

        self._http = HTTPClient(config, logger=logger, session=session)

        # Domain-specific API modules
        self.users = UsersAPI(self._http)
        self.procedures = ProceduresAPI(self._http)
        self.members = MembersAPI(self._http)
        self.files = FilesAPI(self._http)
        self.file_objects = FileObjectsAPI(self._http)

    @property
    def config(self) -> SessionConfig:
        """Get the session configuration."""
        return self._http.config

    @property
    def base_url(self) -> str:
        """Get the base URL for API requests."""
        return self._http.base_url

    @property
    def logger(self) -> LoggerLike:
        """Get the logger."""
        return self._http.logger

    @logger.setter
    def logger(self, value: LoggerLike) -> None:
        self._http.logger = value

    def send_request(
        self,
        method: str,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: str = "",
        extra_headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Send a raw request through the dispatcher."""
        return self._http.send(method, path, query, body, extra_headers)

    # ========== User Methods ==========

    def get_users(self) -> Any:
        """Get the account's users."""
        return self.users.list()

    def get_user(self, user_id: str) -> Any:
        """Get a user by UUID."""
        return self.users.get(user_id)

    def post_user(self, firstname: str, lastname: str, email: str, phone: str) -> Any:
        """Create a user."""
        return self.users.create(firstname, lastname, email, phone)

    def delete_user(self, user_id: str) -> Any:
        """Delete a user."""
        return self.users.delete(user_id)

    # ========== Member Methods ==========

    def get_members(self, procedure: str) -> Any:
        """List the members of a procedure."""
        return self.members.list(procedure)

    def post_member(
        self,
        firstname: str,
        lastname: str,
        email: str,
        phone: str,
        procedure: str
    ) -> Any:
        """Add a member to a procedure."""
        return self.members.create(firstname, lastname, email, phone, procedure)

    def delete_member(self, member_id: str) -> Any:
        """Delete a member."""
        return self.members.delete(member_id)

    # ========== File Methods ==========

    def post_file(
        self,
        name: str,
        content: str,
        type: str,
        procedure: Optional[str] = None
    ) -> Any:
        """Upload a file."""
        return self.files.create(name, content, type, procedure)

    def get_file(self, file_id: str) -> Any:
        """Get file metadata."""
        return self.files.get(file_id)

    def get_file_contents(self, file_id: str) -> Any:
        """Get a file's base64 content."""
        return self.files.download(file_id)

    # ========== File Object Methods ==========

    def post_file_object(
        self,
        file: str,
        member: str,
        page: int,
        position: str,
        reason: str,
        mention: str = "",
        mention2: str = ""
    ) -> Any:
        """Place a signature field on a file."""
        return self.file_objects.create(file, member, page, position, reason, mention, mention2)

    def delete_file_object(self, file_object_id: str) -> Any:
        """Delete a file object."""
        return self.file_objects.delete(file_object_id)

    # ========== Procedure Methods ==========

    def post_procedure(
        self,
        name: str,
        description: str = "",
        start: bool = True,
        members: Optional[List[Any]] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Create a procedure."""
        return self.procedures.create(name, description, start, members, config)

    def get_procedure(self, procedure_id: str) -> Any:
        """Get a procedure."""
        return self.procedures.get(procedure_id)

    def put_procedure(
        self,
        procedure_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        start: Optional[bool] = None,
        members: Optional[List[Any]] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Update a procedure, sending only the supplied fields."""
        return self.procedures.update(procedure_id, name, description, start, members, config)

    def delete_procedure(self, procedure_id: str) -> Any:
        """Delete a procedure."""
        return self.procedures.delete(procedure_id)

    # ========== Context Manager ==========

    def close(self) -> None:
        """Close the HTTP session."""
        self._http.close()

    def __enter__(self) -> "YousignClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def get_client(
    config: Union[SessionConfig, Mapping[str, Any]],
    logger: Optional[LoggerLike] = None,
) -> YousignClient:
    """
    Get an API client instance.

    Args:
        config: Session configuration or mapping
        logger: Optional logger

    Returns:
        YousignClient instance
    """
    return YousignClient(config, logger=logger)
