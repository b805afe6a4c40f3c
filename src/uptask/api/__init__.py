"""REST routes that sit next to the GraphQL endpoint.

Learn: Only operational endpoints live here. All application data goes
through /graphql.
"""

from fastapi import APIRouter

from uptask.api.health import router as health_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(health_router, tags=["health"])
