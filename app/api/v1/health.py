from dataclasses import asdict

from fastapi import APIRouter

from app.core.config import get_matching_policy

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status and active matching thresholds.")
async def health_check():
    policy = asdict(get_matching_policy())
    policy.pop("perfect_match_message", None)
    return {"status": "healthy", "matching_policy": policy}
