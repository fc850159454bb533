"""
Procedures API - Signature procedures.
"""

from typing import Any, Dict, List, Optional

from ._http import HTTPClient
from ..exceptions import ArgumentError
from ..validators import (
    require_bool,
    require_list,
    require_mapping,
    require_string,
    require_uuid,
)


class ProceduresAPI:
    """
    API for signature procedures.
    
    A procedure started on creation needs its members up front; a procedure
    created with start=False can get members later through the Members API.
    """
    
    def __init__(self, http: HTTPClient):
        """
        Initialize Procedures API.
        
        Args:
            http: HTTP client instance
        """
        self._http = http
    
    def create(
        self,
        name: str,
        description: str = "",
        start: bool = True,
        members: Optional[List[Any]] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Create a procedure.
        
        Args:
            name: Procedure name
            description: Procedure description
            start: Start the procedure immediately
            members: Members; required and non-empty when start is True
            config: Free-form procedure configuration (webhooks, emails...)
        """
        require_string("name", name)
        require_string("description", description, allow_empty=True)
        require_bool("start", start)
        if members is None:
            if start:
                raise ArgumentError("members", "is required when start is true")
        else:
            members = require_list("members", members, allow_empty=not start)
        if config is None:
            config = {}
        require_mapping("config", config)
        
        data: Dict[str, Any] = {
            "name": name,
            "description": description,
            "start": start,
            "config": config,
        }
        if members is not None:
            data["members"] = members
        
        return self._http.send_json("POST", "/procedures", data)
    
    def get(self, procedure_id: str) -> Any:
        """Get a procedure."""
        require_uuid("id", procedure_id)
        return self._http.send("GET", f"/procedures/{procedure_id}")
    
    def update(
        self,
        procedure_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        start: Optional[bool] = None,
        members: Optional[List[Any]] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Update a procedure. Only supplied fields are sent.
        
        Args:
            procedure_id: Procedure UUID
            name: New name
            description: New description
            start: Start the procedure
            members: Replacement member list
            config: Replacement configuration
        """
        require_uuid("id", procedure_id)
        
        data: Dict[str, Any] = {}
        if name is not None:
            data["name"] = require_string("name", name)
        if description is not None:
            data["description"] = require_string("description", description, allow_empty=True)
        if start is not None:
            data["start"] = require_bool("start", start)
        if members is not None:
            data["members"] = require_list("members", members)
        if config is not None:
            data["config"] = require_mapping("config", config)
        
        return self._http.send_json("PUT", f"/procedures/{procedure_id}", data)
    
    def delete(self, procedure_id: str) -> Any:
        """Delete a procedure."""
        require_uuid("id", procedure_id)
        return self._http.send("DELETE", f"/procedures/{procedure_id}")
