"""Shared pydantic base for reply shapes."""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Level = Literal["low", "medium", "high"]
Severity = Literal["low", "medium", "high", "critical"]
Direction = Literal["increasing", "decreasing", "stable"]


class ReplyModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (the keys the prompts ask for)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class TimeRange(ReplyModel):
    start: str = ""
    end: str = ""
