"""Theater API endpoints."""

from fastapi import APIRouter, Depends, Query

from cinebooker.api.deps import get_gateway, require_view
from cinebooker.models import Theater, User
from cinebooker.roles import View
from cinebooker.schemas.theater import TheaterResponse
from cinebooker.services.catalog import CatalogBrowser, filter_theaters
from cinebooker.services.gateway import Gateway

router = APIRouter()


@router.get("/theaters", response_model=list[TheaterResponse])
async def get_theaters(
    city: str | None = Query(default=None, description="City to filter theaters"),
    approved: bool = Query(default=True, description="Only approved theaters"),
    gateway: Gateway = Depends(get_gateway),
    _: User = Depends(require_view(View.CATALOG)),
) -> list[Theater]:
    """
    Get list of theaters.

    Args:
        city: Exact city match (all cities when omitted)
        approved: Restrict to approved theaters (default: true)

    Returns:
        Theaters ordered by name
    """
    theaters = await CatalogBrowser(gateway).list_theaters(approved=approved)
    return filter_theaters(theaters, city)
