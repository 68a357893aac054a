"""Central Enum definitions for the forum domain.

These replace scattered string literals so schemas, repositories and the
API agree on the wire values.
"""
from __future__ import annotations
import enum


class PostStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class PostCategory(str, enum.Enum):
    HOUSING_REQUEST = "housing-request"
    SUBLET = "sublet"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"

# ------------------------ Listing vocabulary ------------------------ #
# Not attached to posts yet; published by the root endpoint.

class Amenity(str, enum.Enum):
    PARKING = "parking"
    IN_UNIT_LAUNDRY = "in-unit-laundry"
    DISHWASHER = "dishwasher"
    GYM = "gym"
    GARAGE = "garage"
    ELEVATOR = "elevator"
    BALCONY = "balcony"
    PRIVATE_BATHROOM = "private-bathroom"
    TV = "tv"


class Utility(str, enum.Enum):
    WIFI = "wifi"
    WATER = "water"
    ELECTRICITY = "electricity"
    TV = "tv"

__all__ = [
    "PostStatus",
    "PostCategory",
    "SortOrder",
    "Amenity",
    "Utility",
]
