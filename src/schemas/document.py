"""
Document schemas.
"""

from pydantic import BaseModel, computed_field

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class Document(BaseModel):
    """A stored payload and its recorded content type."""

    id: str
    data: bytes
    content_type: str = DEFAULT_CONTENT_TYPE

    @computed_field
    @property
    def size(self) -> int:
        return len(self.data)
