from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import List, Optional, Union


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON."""

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class AuthorSummary(CamelModel):
    id: int
    username: str
    first_name: str
    last_name: str
    avatar: Optional[str] = None


def split_list(value: Union[str, List[str], None]) -> Optional[List[str]]:
    """Accept a list or a comma-separated string; drop blank entries."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    return [item.strip() for item in value if item and item.strip()]
