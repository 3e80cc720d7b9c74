"""
Schema Base

Wire format is camelCase (tenantId, createdAt, ...), matching the token
claim names. Python code keeps snake_case attributes.
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base for request/response bodies."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MessageResponse(APIModel):
    message: str
