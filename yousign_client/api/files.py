"""
Files API - Documents to sign and attachments.
"""

from typing import Any, Dict, Optional

from ._http import HTTPClient
from ..exceptions import ArgumentError
from ..validators import (
    FILE_TYPES,
    require_base64,
    require_choice,
    require_pdf_name,
    require_uuid,
    require_uuid_reference,
)


class FilesAPI:
    """
    API for files.
    
    Handles:
    - PDF upload (base64 content)
    - File metadata and content download
    """
    
    def __init__(self, http: HTTPClient):
        """
        Initialize Files API.
        
        Args:
            http: HTTP client instance
        """
        self._http = http
    
    def create(
        self,
        name: str,
        content: str,
        type: str,
        procedure: Optional[str] = None
    ) -> Any:
        """
        Upload a file.
        
        Args:
            name: File name, must end with ".pdf"
            content: Base64-encoded PDF, without any "data:" prefix
            type: "signable" or "attachment"
            procedure: Procedure reference; required for attachments
        
        Returns:
            Created file record
        """
        require_pdf_name("name", name)
        require_base64("content", content)
        require_choice("type", type, FILE_TYPES)
        if procedure is None:
            if type == "attachment":
                raise ArgumentError("procedure", "is required when type is 'attachment'")
        else:
            require_uuid_reference("procedure", procedure)
        
        data: Dict[str, Any] = {
            "name": name,
            "content": content,
            "type": type,
        }
        if procedure is not None:
            data["procedure"] = procedure
        
        return self._http.send_json("POST", "/files", data)
    
    def get(self, file_id: str) -> Any:
        """Get file metadata."""
        require_uuid("id", file_id)
        return self._http.send("GET", f"/files/{file_id}")
    
    def download(self, file_id: str) -> Any:
        """
        Get a file's content.
        
        Args:
            file_id: File UUID
        
        Returns:
            Base64-encoded content as returned by the API
        """
        require_uuid("id", file_id)
        return self._http.send("GET", f"/files/{file_id}/download")
