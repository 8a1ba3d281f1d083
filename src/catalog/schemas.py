"""
Pydantic schemas for catalog records and their rendered cards.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.catalog.constants import HouseType, ImageView


class HouseRecord(BaseModel):
    """A house model offered by MOOD. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique catalog identifier")
    type: HouseType = Field(..., description="Structural layout of the house")
    size: str = Field(..., description="Size class label (XS, S, M, L, XL)")
    total_area_m2: float = Field(..., gt=0, description="Total floor area in m2")
    rooms: tuple[str, ...] = Field(
        ..., description="Free-text room descriptions, in catalog order"
    )
    image_url: str = Field(..., description="Image key used to derive asset paths")


class AddOnModuleRecord(HouseRecord):
    """A tiny auxiliary module that can be added next to a house."""


class HouseList(BaseModel):
    """List of catalog records."""

    houses: list[HouseRecord]
    total_count: int


class ModuleList(BaseModel):
    """List of add-on modules."""

    modules: list[AddOnModuleRecord]
    total_count: int


class HouseCard(BaseModel):
    """Display model for one house in the selection panel."""

    id: str
    badges: list[str] = Field(..., description="Type, size and area badges")
    rooms: list[str]
    image_src: str
    image_alt: str


class SkeletonCard(BaseModel):
    """Placeholder card shown while a selection is resolving."""

    skeleton: bool = True


class SelectionCards(BaseModel):
    """Rendered selection panel."""

    is_loading: bool = False
    view: str
    cards: list[HouseCard | SkeletonCard]


class SelectionRequest(BaseModel):
    """Request to render cards for a list of house IDs."""

    model_config = ConfigDict(populate_by_name=True)

    house_ids: list[str] = Field(..., alias="houseIds")
    view: ImageView = ImageView.FACADE
