from datetime import date
from typing import Tuple

from apps.core.domain.entities import (
    NotificationMethod, NotificationSettings, PersonalityType, UserProfileEntity
)

# Odpowiedź na pytanie "jak odrabiałeś prace domowe?" -> (typ, mnożnik tempa)
HOMEWORK_STYLES = {
    'last_minute': (PersonalityType.PROCRASTINATOR, 1.5),
    'steady': (PersonalityType.STEADY, 1.0),
    'front_load': (PersonalityType.SPRINTER, 0.8),
}


def derive_personality(homework_style: str) -> Tuple[PersonalityType, float]:
    return HOMEWORK_STYLES.get(homework_style, (PersonalityType.STEADY, 1.0))


def build_profile(
        name: str,
        homework_style: str,
        notification_method: str,
        today: date
) -> UserProfileEntity:
    """Profil po ankiecie startowej. Seria zaczyna się od 1 (dzisiejsze logowanie)."""
    personality, multiplier = derive_personality(homework_style)
    method = NotificationMethod(notification_method or NotificationMethod.NONE)

    return UserProfileEntity(
        name=(name or "").strip() or "User",
        personality_type=personality,
        pacing_multiplier=multiplier,
        notifications=NotificationSettings(
            enabled=method != NotificationMethod.NONE,
            method=method,
        ),
        streak=1,
        last_login_date=today,
    )
