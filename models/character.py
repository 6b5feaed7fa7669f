import re
from typing import List
from pydantic import BaseModel, Field

PAGE_SIZE = 10

_PEOPLE_ID_RE = re.compile(r"/people/(\d+)/")


class Character(BaseModel):
    """
    A person record from the catalog. Only "name" and the id in "url" mean anything
    to the gallery, every other field is passed through to whoever renders it.
    """
    name: str
    birth_year: str = "unknown"
    eye_color: str = "unknown"
    gender: str = "unknown"
    hair_color: str = "unknown"
    height: str = "unknown"
    mass: str = "unknown"
    skin_color: str = "unknown"
    homeworld: str = ""
    films: List[str] = Field(default_factory=list)
    species: List[str] = Field(default_factory=list)
    starships: List[str] = Field(default_factory=list)
    vehicles: List[str] = Field(default_factory=list)
    url: str = ""
    created: str = ""
    edited: str = ""

    @property
    def character_id(self) -> int:
        return character_id(self.url)


class CharacterPage(BaseModel):
    items: List[Character] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


def character_id(url: str) -> int:
    if not url:
        return 0

    match = _PEOPLE_ID_RE.search(url)
    if not match:
        return 0
    return int(match.group(1))
