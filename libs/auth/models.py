from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AuthUser(BaseModel):
    """
    Identity asserted by the identity provider's session token.

    Proves who the caller is, never what they may do; authorization comes
    from the caller's user profile.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="sub")
    email: EmailStr
    name: Optional[str] = None
    image: Optional[str] = Field(None, alias="picture")
