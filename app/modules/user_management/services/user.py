from typing import Dict, Iterable, Optional
from sqlalchemy.orm import Session

from app.modules.user_management.models.user import User

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_users_by_ids(db: Session, user_ids: Iterable[str]) -> Dict[str, User]:
    """Load several users in one query, keyed by ID"""
    ids = set(user_ids)
    if not ids:
        return {}
    return {user.id: user for user in db.query(User).filter(User.id.in_(ids)).all()}
