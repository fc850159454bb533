"""
Users API - User management operations.
"""

from typing import Any, Dict

from ._http import HTTPClient
from ..validators import require_email, require_phone, require_string, require_uuid


class UsersAPI:
    """
    API for the account's users.
    
    Handles:
    - Listing users
    - User creation, lookup and deletion
    """
    
    def __init__(self, http: HTTPClient):
        """
        Initialize Users API.
        
        Args:
            http: HTTP client instance
        """
        self._http = http
    
    def list(self) -> Any:
        """Get the account's users."""
        return self._http.send("GET", "/users")
    
    def get(self, user_id: str) -> Any:
        """
        Get a user.
        
        Args:
            user_id: User UUID
        """
        require_uuid("id", user_id)
        return self._http.send("GET", f"/users/{user_id}")
    
    def create(
        self,
        firstname: str,
        lastname: str,
        email: str,
        phone: str
    ) -> Any:
        """
        Create a user.
        
        Args:
            firstname: First name
            lastname: Last name
            email: Email address
            phone: Phone number in E.164 form ("+33612345678")
        
        Returns:
            Created user, including its generated id
        """
        require_string("firstname", firstname)
        require_string("lastname", lastname)
        require_email("email", email)
        require_phone("phone", phone)
        
        data: Dict[str, Any] = {
            "firstname": firstname,
            "lastname": lastname,
            "email": email,
            "phone": phone,
        }
        return self._http.send_json("POST", "/users", data)
    
    def delete(self, user_id: str) -> Any:
        """Delete a user. The server answers with an empty body."""
        require_uuid("id", user_id)
        return self._http.send("DELETE", f"/users/{user_id}")
