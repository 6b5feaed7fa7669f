from typing import List
from pydantic import BaseModel, Field

from models.character import Character


class GalleryBootstrap(BaseModel):
    """
    Server-rendered first page. Seeds the client store once, without a fetch.
    """
    results: List[Character] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    search: str = ""

    @classmethod
    def empty(cls, search: str = "", page: int = 1) -> "GalleryBootstrap":
        return cls(results=[], total_count=0, page=page, search=search)
