"""
Health check API route
"""

from datetime import datetime
from fastapi import APIRouter, HTTPException
from user_registry.database.connection import get_db_pool

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check - reports database connectivity"""
    db_pool = get_db_pool()

    try:
        if db_pool is None:
            raise RuntimeError("Database pool not initialized")

        async with db_pool.acquire() as conn:
            await conn.fetchval("SELECT 1")

        return {
            "status": "healthy",
            "timestamp": datetime.utcnow().isoformat(),
            "database": "connected"
        }

    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")
