import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from apps.core.domain.entities import UserProfileEntity
from apps.core.domain.exceptions import ValidationFailure
from apps.core.domain.services.personality import HOMEWORK_STYLES, build_profile
from apps.core.domain.services.streak import StreakTracker
from apps.core.ports.repositories import IProfileRepository

logger = logging.getLogger(__name__)


@dataclass
class SetupProfileInput:
    user_id: int
    name: str
    homework_style: str
    notification_method: str = 'NONE'


class SetupProfileUseCase:
    def __init__(self, repository: IProfileRepository):
        self.repository = repository

    def execute(self, input_dto: SetupProfileInput, today: date) -> UserProfileEntity:
        if input_dto.homework_style and input_dto.homework_style not in HOMEWORK_STYLES:
            raise ValidationFailure(f"Unknown answer: {input_dto.homework_style}")

        try:
            profile = build_profile(
                name=input_dto.name,
                homework_style=input_dto.homework_style,
                notification_method=input_dto.notification_method,
                today=today,
            )
        except ValueError as e:
            raise ValidationFailure(str(e)) from e

        saved = self.repository.save_profile(input_dto.user_id, profile)
        logger.info("Profile set up for user %s (%s)", input_dto.user_id, saved.personality_type.value)
        return saved


class RecordLoginUseCase:
    """Przelicza serię raz na dzień kalendarzowy, przy ładowaniu sesji."""

    def __init__(self, repository: IProfileRepository, tracker: StreakTracker = None):
        self.repository = repository
        self.tracker = tracker or StreakTracker()

    def execute(self, user_id: int, today: date) -> Optional[UserProfileEntity]:
        profile = self.repository.load_profile(user_id)
        if profile is None:
            return None

        updated = self.tracker.track(profile, today)
        if updated is profile:
            return profile

        self.repository.update_streak(user_id, updated.streak, updated.last_login_date)
        logger.info("Streak of user %s: %s -> %s", user_id, profile.streak, updated.streak)
        return updated
