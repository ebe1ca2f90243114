"""
Shared schema configuration.

Wire payloads use camelCase keys (``projectId``, ``createdAt``) while
Python code uses snake_case attributes.  Models accept either form on
input and FastAPI serializes responses by alias.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class HealthRead(BaseModel):
    status: str = "ok"
