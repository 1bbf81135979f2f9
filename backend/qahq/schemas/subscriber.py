"""
Newsletter subscription models
"""

from pydantic import BaseModel


class SubscribeRequest(BaseModel):
    email: str


class SubscribeResponse(BaseModel):
    message: str
