"""
Canonical data model shared by every provider.

All objects here are transient: created per request, never cached.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..config.credentials import decrypt_token


@dataclass
class CanonicalItem:
    """One remote file or folder, normalized across providers."""
    is_folder: bool
    id: str
    name: str
    request_path: str
    icon: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None
    thumbnail: Optional[str] = None
    modified_date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation expected by the file-picker UI."""
        return {
            'isFolder': self.is_folder,
            'icon': self.icon,
            'name': self.name,
            'mimeType': self.mime_type,
            'size': self.size,
            'id': self.id,
            'thumbnail': self.thumbnail,
            'requestPath': self.request_path,
            'modifiedDate': self.modified_date,
        }


@dataclass
class ListResult:
    """One page of a directory listing."""
    username: Optional[str]
    items: List[CanonicalItem] = field(default_factory=list)
    # Opaque cursor for the next page; None at the end of pagination
    next_page_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'username': self.username,
            'items': [item.to_dict() for item in self.items],
            'nextPagePath': self.next_page_path,
        }


@dataclass
class LogoutResult:
    revoked: bool

    def to_dict(self) -> Dict[str, Any]:
        return {'revoked': self.revoked}


@dataclass
class ProviderRequest:
    """
    Normalized inbound request handed over by the routing layer.

    Attributes:
        token: Provider access token (opaque)
        directory: Directory to list (None = root)
        id: Item identifier for download/thumbnail/size
        query: Extra query values; 'cursor' continues a listing
    """
    token: str
    directory: Optional[str] = None
    id: Optional[str] = None
    query: Dict[str, Any] = field(default_factory=dict)

    @property
    def cursor(self) -> Optional[str]:
        return self.query.get('cursor') or None

    def __repr__(self) -> str:
        # Never expose the token in logs or tracebacks
        return (
            f"ProviderRequest(directory={self.directory!r}, id={self.id!r}, "
            f"query={self.query!r})"
        )

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        secret: Optional[str] = None,
    ) -> "ProviderRequest":
        """
        Build a request from a routing-layer payload.

        Args:
            payload: Dict with 'token' and optional 'directory', 'id', 'query'
            secret: Fernet key; when set, 'token' is an encrypted envelope

        Returns:
            ProviderRequest instance

        Raises:
            ValueError: If no token is present
            ProviderAuthError: If the token envelope cannot be decrypted
        """
        token = payload.get('token')
        if not token:
            raise ValueError("Request is missing an access token")

        if secret:
            token = decrypt_token(token, secret)

        return cls(
            token=token,
            directory=payload.get('directory') or None,
            id=payload.get('id') or None,
            query=dict(payload.get('query') or {}),
        )
