from fastapi import APIRouter

from app.api.v1.routers import restaurants as restaurants_router

router = APIRouter()

# public routes
router.include_router(restaurants_router.router)
