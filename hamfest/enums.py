from enum import Enum


class ListingCategory(str, Enum):
    TRANSCEIVER_HF = "transceiver_hf"
    TRANSCEIVER_VHF_UHF = "transceiver_vhf_uhf"
    TRANSCEIVER_HANDHELD = "transceiver_handheld"
    ANTENNA_HF = "antenna_hf"
    ANTENNA_VHF_UHF = "antenna_vhf_uhf"
    ANTENNA_ACCESSORIES = "antenna_accessories"
    POWER_SUPPLY = "power_supply"
    AMPLIFIER = "amplifier"
    TUNER = "tuner"
    ROTATOR = "rotator"
    SWR_METER = "swr_meter"
    DIGITAL_MODES = "digital_modes"
    MICROPHONE = "microphone"
    CABLES_CONNECTORS = "cables_connectors"
    TOOLS = "tools"
    BOOKS_MANUALS = "books_manuals"
    OTHER = "other"


class ItemCondition(str, Enum):
    NEW = "new"
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    PARTS_REPAIR = "parts_repair"


class ListingStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    SOLD = "sold"
    EXPIRED = "expired"
    REMOVED = "removed"


class Currency(str, Enum):
    EUR = "EUR"
    USD = "USD"
    GBP = "GBP"
    RSD = "RSD"


class SortKey(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"


class RatingSort(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    HIGHEST = "highest"
    LOWEST = "lowest"


class ViewMode(str, Enum):
    GRID = "grid"
    LIST = "list"


class DiscoveryState(str, Enum):
    IDLE = "idle"
    FILTERING = "filtering"
