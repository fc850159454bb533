"""
Members API - Signers attached to a procedure.
"""

from typing import Any, Dict

from ._http import HTTPClient
from ..validators import (
    require_email,
    require_phone,
    require_string,
    require_uuid,
    require_uuid_reference,
)


class MembersAPI:
    """
    API for procedure members.
    
    A member belongs to exactly one procedure. Procedure references may be
    bare UUIDs or server ids such as "/procedures/<uuid>".
    """
    
    def __init__(self, http: HTTPClient):
        """
        Initialize Members API.
        
        Args:
            http: HTTP client instance
        """
        self._http = http
    
    def list(self, procedure: str) -> Any:
        """
        List the members of a procedure.
        
        Args:
            procedure: Procedure reference containing its UUID
        """
        require_uuid_reference("procedure", procedure)
        return self._http.send("GET", "/members", query={"procedure": procedure})
    
    def create(
        self,
        firstname: str,
        lastname: str,
        email: str,
        phone: str,
        procedure: str
    ) -> Any:
        """
        Add a member to a procedure.
        
        Args:
            firstname: First name
            lastname: Last name
            email: Email address
            phone: Phone number in E.164 form
            procedure: Procedure reference containing its UUID
        """
        require_string("firstname", firstname)
        require_string("lastname", lastname)
        require_email("email", email)
        require_phone("phone", phone)
        require_uuid_reference("procedure", procedure)
        
        data: Dict[str, Any] = {
            "firstname": firstname,
            "lastname": lastname,
            "email": email,
            "phone": phone,
            "procedure": procedure,
        }
        return self._http.send_json("POST", "/members", data)
    
    def delete(self, member_id: str) -> Any:
        """Delete a member."""
        require_uuid("id", member_id)
        return self._http.send("DELETE", f"/members/{member_id}")
