"""
Typed views over API responses.

The API methods return decoded JSON untouched. These dataclasses are an
opt-in layer for callers who prefer attributes over dict lookups: missing
fields fall back to defaults and unknown fields are ignored.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .validators import extract_uuid


def _require_mapping(data: Any, kind: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"Cannot build {kind} from {type(data).__name__}")
    return data


def _text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _optional_text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return None if value is None else str(value)


@dataclass
class User:
    id: str = ""
    firstname: str = ""
    lastname: str = ""
    email: str = ""
    phone: str = ""
    title: str = ""
    status: str = ""
    permission: str = ""
    organization: str = ""
    workspaces: List[Any] = field(default_factory=list)
    deleted: bool = False
    created_at: Optional[str] = None

    @property
    def uuid(self) -> Optional[str]:
        """Bare UUID of the user."""
        return extract_uuid(self.id)

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        data = _require_mapping(data, "User")
        return cls(
            id=_text(data, "id"),
            firstname=_text(data, "firstname"),
            lastname=_text(data, "lastname"),
            email=_text(data, "email"),
            phone=_text(data, "phone"),
            title=_text(data, "title"),
            status=_text(data, "status"),
            permission=_text(data, "permission"),
            organization=_text(data, "organization"),
            workspaces=list(data.get("workspaces") or []),
            deleted=data.get("deleted") is True,
            created_at=_optional_text(data, "createdAt"),
        )


@dataclass
class Member:
    id: str = ""
    firstname: str = ""
    lastname: str = ""
    email: str = ""
    phone: str = ""
    status: str = ""
    type: str = ""
    procedure: Optional[str] = None
    position: Optional[int] = None

    @property
    def uuid(self) -> Optional[str]:
        return extract_uuid(self.id)

    @classmethod
    def from_dict(cls, data: Any) -> "Member":
        data = _require_mapping(data, "Member")
        position = data.get("position")
        return cls(
            id=_text(data, "id"),
            firstname=_text(data, "firstname"),
            lastname=_text(data, "lastname"),
            email=_text(data, "email"),
            phone=_text(data, "phone"),
            status=_text(data, "status"),
            type=_text(data, "type"),
            procedure=_optional_text(data, "procedure"),
            position=position if isinstance(position, int) else None,
        )


@dataclass
class FileRecord:
    id: str = ""
    name: str = ""
    type: str = ""
    content_type: str = ""
    procedure: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def uuid(self) -> Optional[str]:
        return extract_uuid(self.id)

    @classmethod
    def from_dict(cls, data: Any) -> "FileRecord":
        data = _require_mapping(data, "FileRecord")
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            type=_text(data, "type"),
            content_type=_text(data, "contentType"),
            procedure=_optional_text(data, "procedure"),
            created_at=_optional_text(data, "createdAt"),
        )


@dataclass
class FileObject:
    id: str = ""
    file: str = ""
    member: str = ""
    page: int = 0
    position: str = ""
    reason: str = ""
    mention: str = ""
    mention2: str = ""

    @property
    def uuid(self) -> Optional[str]:
        return extract_uuid(self.id)

    @classmethod
    def from_dict(cls, data: Any) -> "FileObject":
        data = _require_mapping(data, "FileObject")
        file_ref = data.get("file")
        member_ref = data.get("member")
        # Expanded responses embed the file and member objects
        if isinstance(file_ref, dict):
            file_ref = file_ref.get("id")
        if isinstance(member_ref, dict):
            member_ref = member_ref.get("id")
        page = data.get("page")
        return cls(
            id=_text(data, "id"),
            file=file_ref or "",
            member=member_ref or "",
            page=page if isinstance(page, int) else 0,
            position=_text(data, "position"),
            reason=_text(data, "reason"),
            mention=_text(data, "mention"),
            mention2=_text(data, "mention2"),
        )


@dataclass
class Procedure:
    """
    A signature procedure.

    Members and files are parsed into their own views when the response
    embeds them as objects; plain references are kept as Member/FileRecord
    instances carrying only the id.
    """

    id: str = ""
    name: str = ""
    description: str = ""
    status: str = ""
    start: Optional[bool] = None
    members: List[Member] = field(default_factory=list)
    files: List[FileRecord] = field(default_factory=list)
    config: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[str] = None

    @property
    def uuid(self) -> Optional[str]:
        return extract_uuid(self.id)

    @classmethod
    def from_dict(cls, data: Any) -> "Procedure":
        data = _require_mapping(data, "Procedure")

        members = []
        for item in data.get("members") or []:
            members.append(Member.from_dict(item) if isinstance(item, dict) else Member(id=str(item)))

        files = []
        for item in data.get("files") or []:
            files.append(FileRecord.from_dict(item) if isinstance(item, dict) else FileRecord(id=str(item)))

        start = data.get("start")
        config = data.get("config")
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            description=_text(data, "description"),
            status=_text(data, "status"),
            start=start if isinstance(start, bool) else None,
            members=members,
            files=files,
            config=config if isinstance(config, dict) else {},
            created_at=_optional_text(data, "createdAt"),
        )
