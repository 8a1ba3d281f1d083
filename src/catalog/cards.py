"""
Card rendering for the house selection panel.

Turns catalog records into the display models the chat UI shows next to the
conversation: badges, room list and the image for the selected view.
"""

from typing import Sequence

from src.catalog.constants import (
    IMAGE_SEPARATOR,
    IMAGE_SUFFIX,
    IMAGE_VIEW_LABELS,
    IMAGE_VIEW_SUFFIXES,
    SKELETON_CARD_COUNT,
    ImageView,
)
from src.catalog.schemas import HouseCard, HouseRecord, SelectionCards, SkeletonCard
from src.config import get_app_settings


def get_image_path(
    record: HouseRecord, view: ImageView, asset_base: str | None = None
) -> str:
    """Build the asset path of a record's image for one view.

    "XS_-_A.jpg" seen as facade becomes
    "/houses/snippets/XS_A/XS_A_fachada.jpg".

    Args:
        record: House or module record
        view: Which image to show
        asset_base: URL prefix, defaults to the configured asset base path

    Returns:
        str: Image path
    """
    if asset_base is None:
        asset_base = get_app_settings().asset_base_path
    base_id = record.image_url.replace(IMAGE_SUFFIX, "").replace(IMAGE_SEPARATOR, "_")
    return f"{asset_base.rstrip('/')}/{base_id}/{base_id}_{IMAGE_VIEW_SUFFIXES[view]}.jpg"


def get_image_type_label(view: ImageView) -> str:
    return IMAGE_VIEW_LABELS[view]


def build_house_card(record: HouseRecord, view: ImageView) -> HouseCard:
    return HouseCard(
        id=record.id,
        badges=[
            record.type.value,
            record.size,
            f"Area: {record.total_area_m2:g} m2",
        ],
        rooms=list(record.rooms),
        image_src=get_image_path(record, view),
        image_alt=f"{record.type.value} - {get_image_type_label(view)}",
    )


def render_selection(
    records: Sequence[HouseRecord],
    view: ImageView = ImageView.FACADE,
    is_loading: bool = False,
) -> SelectionCards:
    """Render the selection panel, or its skeleton while loading."""
    if is_loading:
        cards: list[HouseCard | SkeletonCard] = [
            SkeletonCard() for _ in range(SKELETON_CARD_COUNT)
        ]
    else:
        cards = [build_house_card(record, view) for record in records]
    return SelectionCards(is_loading=is_loading, view=view.value, cards=cards)
