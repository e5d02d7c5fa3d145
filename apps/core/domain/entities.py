from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class PersonalityType(str, Enum):
    STEADY = 'STEADY'
    SPRINTER = 'SPRINTER'
    PROCRASTINATOR = 'PROCRASTINATOR'


class NotificationMethod(str, Enum):
    BROWSER = 'BROWSER'
    EMAIL = 'EMAIL'
    LINE = 'LINE'
    NONE = 'NONE'


@dataclass
class NotificationSettings:
    enabled: bool = False
    method: NotificationMethod = NotificationMethod.NONE
    time: str = "09:00"  # HH:MM


@dataclass
class UserProfileEntity:
    name: str
    personality_type: PersonalityType = PersonalityType.STEADY
    # >1 = praca na końcu, <1 = praca na początku. Zapisywane, silnik go (jeszcze) nie używa.
    pacing_multiplier: float = 1.0
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    streak: int = 0
    last_login_date: Optional[date] = None
