"""
Catalog router.

Read-only endpoints over the house catalog, plus card rendering for a
selection reported by the configurator chat.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.ai.configurator.exceptions import SelectionValidationError
from src.ai.configurator.tools import parse_select_houses
from src.catalog.cards import render_selection
from src.catalog.schemas import HouseList, HouseRecord, ModuleList, SelectionCards, SelectionRequest
from src.catalog.service import CatalogService, get_catalog_service

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("/houses", response_model=HouseList)
async def list_houses(
    bedrooms: int | None = Query(None, ge=0, description="Only houses with this many bedrooms"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> HouseList:
    """
    List catalog houses, optionally filtered by bedroom count.

    Args:
        bedrooms: Exact bedroom count to filter by
        catalog: Catalog service dependency

    Returns:
        HouseList: Houses in catalog order
    """
    if bedrooms is None:
        houses = list(catalog.houses)
    else:
        houses = catalog.filter_houses_by_bedrooms(bedrooms)
    return HouseList(houses=houses, total_count=len(houses))


@router.get("/houses/{house_id}", response_model=HouseRecord)
async def get_house(
    house_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> HouseRecord:
    """Get a single house by ID."""
    house = catalog.get_house(house_id)
    if house is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"House not found: {house_id}",
        )
    return house


@router.get("/modules", response_model=ModuleList)
async def list_modules(
    catalog: CatalogService = Depends(get_catalog_service),
) -> ModuleList:
    """List the tiny add-on modules."""
    return ModuleList(modules=list(catalog.modules), total_count=len(catalog.modules))


@router.post("/selection", response_model=SelectionCards)
async def render_house_selection(
    request: SelectionRequest,
    catalog: CatalogService = Depends(get_catalog_service),
) -> SelectionCards:
    """
    Render cards for the houses of a selectHouses call.

    IDs are validated exactly like the tool validates them, so an unknown ID
    rejects the whole selection.

    Raises:
        HTTPException: 422 if any ID is not in the catalog
    """
    try:
        selection = parse_select_houses(
            {"houseIds": request.house_ids}, catalog.house_ids()
        )
    except SelectionValidationError as e:
        raise HTTPException(
            status_code=422, detail=e.message
        )
    records = catalog.resolve_houses(selection.house_ids)
    return render_selection(records, request.view)
