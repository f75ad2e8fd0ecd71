from typing import Optional

from pydantic import BaseModel, EmailStr


class UserContext(BaseModel):
    user_id: str
    user_name: str
    email: Optional[EmailStr] = None
