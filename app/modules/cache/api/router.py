from typing import Any

from fastapi import APIRouter

from app.modules.cache.invalidation import describe_rules

router = APIRouter()

@router.get("/invalidation-rules")
def read_invalidation_rules() -> Any:
    """Which client query keys each mutation invalidates"""
    return {"success": True, "data": describe_rules()}
