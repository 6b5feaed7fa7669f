import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

import pytest

from models.character import Character, CharacterPage

PEOPLE_URL = "https://swapi.py4e.com/api/people/"


def make_character(n: int, name: Optional[str] = None) -> Character:
    return Character(
        name=name or f"Character {n}",
        gender="n/a",
        height="100",
        url=f"{PEOPLE_URL}{n}/",
    )


def make_page(total: int, *ids: int) -> CharacterPage:
    return CharacterPage(items=[make_character(i) for i in ids], total=total)


async def spin(times: int = 5) -> None:
    """Let scheduled tasks run up to their next await."""
    for _ in range(times):
        await asyncio.sleep(0)


@dataclass
class PendingCall:
    query: str
    page: int
    future: asyncio.Future

    @property
    def pair(self) -> Tuple[str, int]:
        return self.query, self.page

    def resolve(self, result: CharacterPage) -> None:
        self.future.set_result(result)

    def fail(self, exc: BaseException) -> None:
        self.future.set_exception(exc)


class FakeCatalogClient:
    """
    Stands in for CatalogClient. Pairs listed in ``responses`` answer right away
    (an exception instance is raised instead of returned); any other call stays
    pending until the test resolves it, so responses can arrive in any order.
    """

    def __init__(self, responses: Optional[Dict[Tuple[str, int], Union[CharacterPage, Exception]]] = None):
        self.responses = dict(responses or {})
        self.calls: List[PendingCall] = []

    @property
    def pairs(self) -> List[Tuple[str, int]]:
        return [c.pair for c in self.calls]

    async def search(self, query: str, page: int) -> CharacterPage:
        future = asyncio.get_running_loop().create_future()
        call = PendingCall(query, page, future)
        self.calls.append(call)

        canned = self.responses.get((query, page))
        if isinstance(canned, Exception):
            call.fail(canned)
        elif canned is not None:
            call.resolve(canned)

        return await future


@pytest.fixture
def fake_client():
    return FakeCatalogClient()
