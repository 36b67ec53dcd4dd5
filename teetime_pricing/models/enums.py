from enum import Enum

class LoyaltySegment(str, Enum):
    FUTURE = "FUTURE"
    SMART = "SMART"
    CHERRY = "CHERRY"
    PRESTIGE = "PRESTIGE"

class FactorCode(str, Enum):
    TIME_STEP = "TIME_STEP"
    WEATHER = "WEATHER"
    VIP_STATUS = "VIP_STATUS"
    LBS_NEARBY = "LBS_NEARBY"
    MAX_CAP = "MAX_CAP"

class BlockReason(str, Enum):
    WEATHER_STORM = "WEATHER_STORM"

class WeatherLabel(str, Enum):
    RAIN = "Rain"
    CLOUDY = "Cloudy"
    SUNNY = "Sunny"
    UNKNOWN = "Unknown"

class NotificationType(str, Enum):
    PANIC_DEAL = "PANIC_DEAL"

class NotificationStatus(str, Enum):
    PENDING = "PENDING"
    SENT = "SENT"
