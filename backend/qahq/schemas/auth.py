"""
Admin login models
"""

from pydantic import BaseModel


class AdminLoginRequest(BaseModel):
    password: str = ""


class AdminLoginResponse(BaseModel):
    success: bool
