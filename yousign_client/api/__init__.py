"""
Yousign API Client Package.

Structure:
    - client.py: Main YousignClient facade
    - _http.py: Request dispatcher with auth headers, logging and error handling
    - users.py: Users
    - procedures.py: Signature procedures
    - members.py: Procedure members
    - files.py: Files and their content
    - file_objects.py: Signature placements on files

Usage:
    from yousign_client.api import YousignClient

    client = YousignClient({"api_key": "...", "is_testing": True})

    # Domain-specific
    users = client.users.list()
    procedure = client.procedures.create("Contract", start=False)

    # Flat methods
    users = client.get_users()
    procedure = client.post_procedure("Contract", start=False)
"""

from .client import YousignClient, get_client
from ._http import HTTPClient, LoggerLike, create_default_logger
from .users import UsersAPI
from .procedures import ProceduresAPI
from .members import MembersAPI
from .files import FilesAPI
from .file_objects import FileObjectsAPI

__all__ = [
    # Main client
    "YousignClient",
    "get_client",
    # HTTP layer
    "HTTPClient",
    "LoggerLike",
    "create_default_logger",
    # Domain APIs
    "UsersAPI",
    "ProceduresAPI",
    "MembersAPI",
    "FilesAPI",
    "FileObjectsAPI",
]
