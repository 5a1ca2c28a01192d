from pydantic import BaseModel
from pydantic import ConfigDict


class Schema(BaseModel):
    """Response model that reads straight from analytics dataclasses."""

    model_config = ConfigDict(from_attributes=True)


class CountItem(Schema):
    name: str
    count: int


def count_items(value: object) -> object:
    """Turn `[(name, count), ...]` pairs into CountItem-shaped dicts."""

    if isinstance(value, list):
        return [
            {"name": item[0], "count": item[1]} if isinstance(item, tuple) else item
            for item in value
        ]
    return value


def sorted_names(value: object) -> object:
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return value
