from typing import Optional

from app.core.schemas import APIModel

class UserSummary(APIModel):
    """Public identity shown next to likes, reactions, shares and comments"""
    id: str
    username: Optional[str] = None
    name: Optional[str] = None
    avatar: Optional[str] = None
    verified: bool = False
