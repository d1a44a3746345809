"""Asset data models"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RemoteAssetRecord:
    """One image resource as reported by the Cloudinary Admin API"""
    public_id: str
    width: Optional[int]
    height: Optional[int]
    format: Optional[str]
    bytes: int
    url: str
    secure_url: str

    @classmethod
    def from_api(cls, resource: Dict[str, Any]) -> "RemoteAssetRecord":
        return cls(
            public_id=resource["public_id"],
            width=resource.get("width"),
            height=resource.get("height"),
            format=resource.get("format"),
            bytes=resource.get("bytes") or 0,
            url=resource.get("url", ""),
            secure_url=resource.get("secure_url", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "public_id": self.public_id,
            "width": self.width,
            "height": self.height,
            "format": self.format,
            "bytes": self.bytes,
            "url": self.url,
            "secure_url": self.secure_url,
        }
