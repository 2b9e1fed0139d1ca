"""
User API routes

Routes are declared in an explicit table and bound to a UserHandler that
holds the store it was constructed with.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Path, Response
from fastapi.responses import PlainTextResponse

from user_registry.models.user import User, UserPayload
from user_registry.services.users_service import UserStore

logger = logging.getLogger(__name__)

USER_ADDED_MESSAGE = "User Added Successfully"
USER_UPDATED_MESSAGE = "User Updated Successfully"

# Range of the BIGINT id column
USER_ID_MIN = -2**63
USER_ID_MAX = 2**63 - 1


class UserHandler:
    """Translates HTTP requests on the user resource into store calls"""

    def __init__(self, store: UserStore):
        self.store = store

    async def list_users(self) -> List[User]:
        """List all users"""
        try:
            return await self.store.list_all()
        except Exception as e:
            logger.error(f"Failed to list users: {e}")
            raise HTTPException(status_code=500, detail=f"Service error: {str(e)}")

    async def get_user(self, user_id: int = Path(..., ge=USER_ID_MIN, le=USER_ID_MAX)):
        """Get a single user by id"""
        try:
            lookup = await self.store.get(user_id)
        except Exception as e:
            logger.error(f"Failed to get user {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Service error: {str(e)}")

        if not lookup.found:
            return Response(status_code=404)
        return lookup.user

    async def create_user(self, request: UserPayload):
        """Create a new user"""
        try:
            user = await self.store.create(request)
        except Exception as e:
            logger.error(f"Failed to create user: {e}")
            raise HTTPException(status_code=500, detail=f"Service error: {str(e)}")

        logger.info(f"User {user.id} added")
        return PlainTextResponse(USER_ADDED_MESSAGE)

    async def update_user(
        self,
        request: UserPayload,
        user_id: int = Path(..., ge=USER_ID_MIN, le=USER_ID_MAX)
    ):
        """Update first and last name of an existing user"""
        try:
            updated = await self.store.update(user_id, request)
        except Exception as e:
            logger.error(f"Failed to update user {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Service error: {str(e)}")

        if not updated:
            return Response(status_code=404)
        return PlainTextResponse(USER_UPDATED_MESSAGE)


# (method, path, handler attribute, response model)
USER_ROUTES = [
    ("GET", "", "list_users", List[User]),
    ("GET", "/{user_id}", "get_user", User),
    ("POST", "", "create_user", None),
    ("PUT", "/{user_id}", "update_user", None),
]


def build_router(handler: UserHandler) -> APIRouter:
    """Register every entry of USER_ROUTES on a new router"""
    router = APIRouter()
    for method, path, attribute, response_model in USER_ROUTES:
        router.add_api_route(
            path,
            getattr(handler, attribute),
            methods=[method],
            response_model=response_model,
            responses={404: {"description": "User not found"}} if "{user_id}" in path else None,
        )
    return router
