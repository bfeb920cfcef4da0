from fastapi import APIRouter

from starlaunch.api.routes import auth, health, points, projects, stats, users

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(points.router, prefix="/points", tags=["points"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
