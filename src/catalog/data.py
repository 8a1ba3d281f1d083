"""
MOOD catalog data.

Houses come in three layouts (articulated, linear, parallel) and five size
classes. Tiny modules are sold as add-ons and are kept in their own list.
"""

from src.catalog.constants import HouseType
from src.catalog.schemas import AddOnModuleRecord, HouseRecord

TWO_BEDROOMS = "2 bedrooms + 1 bathroom"
SOCIAL_AREA = "social area with integrated kitchen"


HOUSES: tuple[HouseRecord, ...] = (
    HouseRecord(
        id="xsa",
        type=HouseType.ARTICULATED,
        size="XS",
        total_area_m2=76,
        rooms=(TWO_BEDROOMS, SOCIAL_AREA),
        image_url="XS_-_A.jpg",
    ),
    HouseRecord(
        id="sa",
        type=HouseType.ARTICULATED,
        size="S",
        total_area_m2=84,
        rooms=(TWO_BEDROOMS, SOCIAL_AREA),
        image_url="S_-_A.jpg",
    ),
    HouseRecord(
        id="ma",
        type=HouseType.ARTICULATED,
        size="M",
        total_area_m2=116,
        rooms=(TWO_BEDROOMS, "1 en suite bedroom", SOCIAL_AREA, "laundry"),
        image_url="M_-_A.jpg",
    ),
    HouseRecord(
        id="la",
        type=HouseType.ARTICULATED,
        size="L",
        total_area_m2=159,
        rooms=(
            TWO_BEDROOMS,
            "1 en suite bedroom with walk-in closet",
            SOCIAL_AREA,
            "laundry and storage",
        ),
        image_url="L_-_A.jpg",
    ),
    HouseRecord(
        id="xla",
        type=HouseType.ARTICULATED,
        size="XL",
        total_area_m2=250,
        rooms=(
            TWO_BEDROOMS,
            "2 en suite bedrooms",
            SOCIAL_AREA,
            "toilet",
            "laundry and storage",
        ),
        image_url="XL_-_A.jpg",
    ),
    HouseRecord(
        id="xsl",
        type=HouseType.LINEAR,
        size="XS",
        total_area_m2=65,
        rooms=("1 bedroom + 1 bathroom", SOCIAL_AREA),
        image_url="XS_-_L.jpg",
    ),
    HouseRecord(
        id="sl",
        type=HouseType.LINEAR,
        size="S",
        total_area_m2=84,
        rooms=(TWO_BEDROOMS, SOCIAL_AREA),
        image_url="S_-_L.jpg",
    ),
    HouseRecord(
        id="ml",
        type=HouseType.LINEAR,
        size="M",
        total_area_m2=120,
        rooms=(TWO_BEDROOMS, "1 en suite bedroom", SOCIAL_AREA, "laundry"),
        image_url="M_-_L.jpg",
    ),
    HouseRecord(
        id="ll",
        type=HouseType.LINEAR,
        size="L",
        total_area_m2=135,
        rooms=(TWO_BEDROOMS, "1 en suite bedroom", SOCIAL_AREA, "laundry"),
        image_url="L_-_L.jpg",
    ),
    HouseRecord(
        id="xll",
        type=HouseType.LINEAR,
        size="XL",
        total_area_m2=235,
        rooms=(
            TWO_BEDROOMS,
            "2 en suite bedrooms",
            SOCIAL_AREA,
            "toilet",
            "laundry and storage",
        ),
        image_url="XL_-_L.jpg",
    ),
    HouseRecord(
        id="xsp",
        type=HouseType.PARALLEL,
        size="XS",
        total_area_m2=69,
        rooms=(TWO_BEDROOMS, SOCIAL_AREA),
        image_url="XS_-_P.jpg",
    ),
    HouseRecord(
        id="sp",
        type=HouseType.PARALLEL,
        size="S",
        total_area_m2=89,
        rooms=(TWO_BEDROOMS, SOCIAL_AREA),
        image_url="S_-_P.jpg",
    ),
    HouseRecord(
        id="mp",
        type=HouseType.PARALLEL,
        size="M",
        total_area_m2=129,
        rooms=(
            TWO_BEDROOMS,
            "1 en suite bedroom",
            SOCIAL_AREA,
            "laundry and storage",
        ),
        image_url="M_-_P.jpg",
    ),
    HouseRecord(
        id="lp",
        type=HouseType.PARALLEL,
        size="L",
        total_area_m2=164,
        rooms=(
            TWO_BEDROOMS,
            "1 en suite bedroom with walk-in closet",
            SOCIAL_AREA,
            "laundry and storage",
        ),
        image_url="L_-_P.jpg",
    ),
    HouseRecord(
        id="xlp",
        type=HouseType.PARALLEL,
        size="XL",
        total_area_m2=229,
        rooms=(TWO_BEDROOMS, "1 en suite bedroom", SOCIAL_AREA),
        image_url="XL_-_P.jpg",
    ),
)


TINY_MODULES: tuple[AddOnModuleRecord, ...] = (
    AddOnModuleRecord(
        id="tinyepg",
        type=HouseType.TINY,
        size="30m2",
        total_area_m2=30,
        rooms=("studio with bathroom",),
        image_url="TINY_-_EST.jpg",
    ),
    AddOnModuleRecord(
        id="tinyeg",
        type=HouseType.TINY,
        size="38m2",
        total_area_m2=38,
        rooms=("open space (studio apartment)",),
        image_url="TINY_-_ES.jpg",
    ),
    AddOnModuleRecord(
        id="tinyog",
        type=HouseType.LINEAR_TINY,
        size="40m2",
        total_area_m2=40,
        rooms=("office with 8 workstations", "bathroom"),
        image_url="TINY_-_OF.jpg",
    ),
    AddOnModuleRecord(
        id="tiny1.jpg",
        type=HouseType.TINY,
        size="45m2",
        total_area_m2=45,
        rooms=("1 bedroom + 1 bathroom", SOCIAL_AREA),
        image_url="TINY_-_1_DOR.jpg",
    ),
)
