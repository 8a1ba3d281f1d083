"""
Catalog service for house lookup and filtering.

The catalog is built once per process and never mutated; every lookup here
is a pure read over the static records in ``src.catalog.data``.
"""

import json
import re
from typing import Iterable, Sequence

from src.catalog.data import HOUSES, TINY_MODULES
from src.catalog.schemas import AddOnModuleRecord, HouseRecord
from src.utils.logger import logger

BEDROOM_PATTERN = re.compile(r"(\d+)\s+bedroom")
STUDIO_TOKEN = "studio"


def get_bedrooms(rooms: Iterable[str]) -> int:
    """Derive a bedroom count from free-text room descriptions.

    Descriptions are scanned in order and the first one that either starts
    with "<N> bedroom" or mentions a studio decides the result. Anything that
    cannot be parsed (e.g. "2-3 bedrooms") counts as zero.

    Args:
        rooms: Room descriptions, in the order they are stored

    Returns:
        int: Bedroom count, 0 for studios or unparseable input
    """
    for room in rooms:
        match = BEDROOM_PATTERN.match(room)
        if match:
            return int(match.group(1))
        if STUDIO_TOKEN in room:
            return 0
    return 0


class CatalogService:
    """Read-only access to the house and add-on module collections."""

    def __init__(
        self,
        houses: Sequence[HouseRecord] = HOUSES,
        modules: Sequence[AddOnModuleRecord] = TINY_MODULES,
    ):
        self._houses = tuple(houses)
        self._modules = tuple(modules)
        self._houses_by_id = {house.id: house for house in self._houses}

    @property
    def houses(self) -> tuple[HouseRecord, ...]:
        return self._houses

    @property
    def modules(self) -> tuple[AddOnModuleRecord, ...]:
        return self._modules

    def house_ids(self) -> list[str]:
        """Identifiers the selection tool is allowed to accept, in catalog order."""
        return [house.id for house in self._houses]

    def get_house(self, house_id: str) -> HouseRecord | None:
        return self._houses_by_id.get(house_id)

    def filter_houses_by_bedrooms(self, target_bedrooms: int) -> list[HouseRecord]:
        """Return every house whose bedroom count equals the target, in catalog order."""
        return [
            house
            for house in self._houses
            if get_bedrooms(house.rooms) == target_bedrooms
        ]

    def resolve_houses(self, house_ids: Iterable[str]) -> list[HouseRecord]:
        """Look up houses by ID, in the order requested.

        Repeated IDs resolve to a single record. Unknown IDs are skipped.

        Args:
            house_ids: Identifiers reported by the selection tool

        Returns:
            list[HouseRecord]: Matching records in requested order
        """
        resolved: list[HouseRecord] = []
        seen: set[str] = set()
        for house_id in house_ids:
            if house_id in seen:
                continue
            seen.add(house_id)
            house = self._houses_by_id.get(house_id)
            if house is None:
                logger.warning("Skipping unknown house id", house_id=house_id)
                continue
            resolved.append(house)
        return resolved

    def to_prompt_data(self) -> str:
        """Serialize the catalog as JSON for the model instructions."""
        payload = {
            "houses": [house.model_dump(mode="json") for house in self._houses],
            "tiny_modules": [
                module.model_dump(mode="json") for module in self._modules
            ],
        }
        return json.dumps(payload, ensure_ascii=False)


_catalog_service: CatalogService | None = None


def get_catalog_service() -> CatalogService:
    """
    Get or create the catalog service singleton.

    Returns:
        CatalogService: The catalog service instance
    """
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService()
        logger.info(
            "Initialized CatalogService",
            house_count=len(_catalog_service.houses),
            module_count=len(_catalog_service.modules),
        )
    return _catalog_service
