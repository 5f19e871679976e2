from enum import Enum


class ContentStatus(str, Enum):
    publish = "PUBLISH"
    draft = "DRAFT"


class OrderType(str, Enum):
    asc = "ASC"
    desc = "DESC"
