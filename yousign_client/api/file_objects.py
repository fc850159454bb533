"""
File Objects API - Signature fields placed on a file for a member.
"""

from typing import Any, Dict

from ._http import HTTPClient
from ..validators import require_int, require_string, require_uuid, require_uuid_reference


class FileObjectsAPI:
    """API for file objects (signature placements)."""
    
    def __init__(self, http: HTTPClient):
        """
        Initialize File Objects API.
        
        Args:
            http: HTTP client instance
        """
        self._http = http
    
    def create(
        self,
        file: str,
        member: str,
        page: int,
        position: str,
        reason: str,
        mention: str = "",
        mention2: str = ""
    ) -> Any:
        """
        Place a signature field on a file page.
        
        Args:
            file: File reference containing its UUID
            member: Member reference containing its UUID
            page: Page number (1-indexed)
            position: Rectangle "llx,lly,urx,ury" in PDF points
            reason: Reason shown in the signature
            mention: First annotation line
            mention2: Second annotation line
        """
        require_uuid_reference("file", file)
        require_uuid_reference("member", member)
        require_int("page", page, minimum=1)
        require_string("position", position)
        require_string("reason", reason)
        require_string("mention", mention, allow_empty=True)
        require_string("mention2", mention2, allow_empty=True)
        
        data: Dict[str, Any] = {
            "file": file,
            "member": member,
            "page": page,
            "position": position,
            "reason": reason,
            "mention": mention,
            "mention2": mention2,
        }
        return self._http.send_json("POST", "/file_objects", data)
    
    def delete(self, file_object_id: str) -> Any:
        """Delete a file object."""
        require_uuid("id", file_object_id)
        return self._http.send("DELETE", f"/file_objects/{file_object_id}")
