from fastapi import APIRouter, Depends
from gazetteer.db.index import GazetteerIndex, get_index
from . import cities

api_router = APIRouter(
    prefix="/api/v1",
    tags=["api"],
    responses={404: {"description": "Not found"}},
)

api_router.include_router(cities.router)


@api_router.get("/health", tags=["health"])
async def health_check(index: GazetteerIndex = Depends(get_index)):
    """API health check endpoint, with the number of cities loaded."""
    return {"status": "ok", "cities_loaded": len(index)}
