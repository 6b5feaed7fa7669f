from pydantic import BaseModel, Field

class CharacterQuery(BaseModel):
    search: str = Field(
        default="",
        max_length=100,
        description="Free-text filter on character names"
    )

    page: int = Field(
        default=1,
        ge=1,
        description="Page number (1-based)"
    )
