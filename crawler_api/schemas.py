from pydantic import BaseModel, Field, field_validator
from typing import List

class FetchRequest(BaseModel):
    urls: List[str] = Field(default_factory=list, description="Pages to fetch, in any order")

    @field_validator("urls", mode="before")
    @classmethod
    def _null_is_empty(cls, value):
        return [] if value is None else value

class FetchData(BaseModel):
    contents: List[str] = Field(default_factory=list, description="Extracted text, one entry per page that produced any")

class FetchResponse(BaseModel):
    code: int = 0
    msg: str = ""
    data: FetchData = Field(default_factory=FetchData)
