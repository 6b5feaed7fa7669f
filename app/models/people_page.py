from pydantic import BaseModel, Field
from typing import List, Optional

from models.character import Character, CharacterPage

class PeoplePage(BaseModel):
    """
    Raw payload of the people endpoint: "count" is the total across all pages,
    "results" holds at most one page of records.
    """
    count: int = Field(..., ge=0)
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[Character] = Field(default_factory=list)

    def to_character_page(self) -> CharacterPage:
        return CharacterPage(items=self.results, total=self.count)
