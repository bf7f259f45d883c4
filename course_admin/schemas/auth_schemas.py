from typing import Optional
from pydantic import Field
from .camel_base_model import CamelCaseBaseModel as BaseModel, CamelCaseRequestModel


class LoginRequest(CamelCaseRequestModel):
    """Login request schema"""

    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class LoginResponse(BaseModel):
    """Login response schema"""

    token: str = Field(..., min_length=1, description="Bearer token")


class User(BaseModel):
    """Signed-in user record kept next to the token"""

    id: Optional[int] = Field(default=None, description="User ID")
    username: str = Field(..., description="Username")
    role: str = Field(default="", description="User role")
