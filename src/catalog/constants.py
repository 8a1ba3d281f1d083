"""
Catalog constants and enums.

This module contains the enums and static values shared by the catalog,
the selection tool and the presentation layer.
"""

from enum import Enum


class HouseType(str, Enum):
    """Structural layout of a house or module."""

    ARTICULATED = "articulated"
    LINEAR = "linear"
    PARALLEL = "parallel"
    TINY = "tiny"
    LINEAR_TINY = "linear tiny"


class ImageView(str, Enum):
    """Image views available for every catalog record."""

    FACADE = "facade"
    ISOMETRIC = "isometric"
    LAYOUT = "layout"


# Filename token used by the asset snippets for each view
IMAGE_VIEW_SUFFIXES: dict[ImageView, str] = {
    ImageView.FACADE: "fachada",
    ImageView.ISOMETRIC: "volumetria",
    ImageView.LAYOUT: "layout",
}

IMAGE_VIEW_LABELS: dict[ImageView, str] = {
    ImageView.FACADE: "Facade",
    ImageView.ISOMETRIC: "Isometric",
    ImageView.LAYOUT: "Floor Plan",
}

IMAGE_SUFFIX = ".jpg"
IMAGE_SEPARATOR = "_-_"

# Number of placeholder cards shown while a selection is loading
SKELETON_CARD_COUNT = 4
