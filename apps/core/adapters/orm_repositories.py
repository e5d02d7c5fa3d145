import logging
from datetime import date
from typing import Optional

from django.db import DatabaseError

from apps.core.domain.entities import (
    NotificationMethod, NotificationSettings, PersonalityType, UserProfileEntity
)
from apps.core.domain.exceptions import RepositoryFailure
from apps.core.models import UserProfile as UserProfileModel
from apps.core.ports.repositories import IProfileRepository

logger = logging.getLogger(__name__)


class DjangoProfileRepository(IProfileRepository):
    def to_entity(self, model: UserProfileModel) -> UserProfileEntity:
        """Model Django -> czysta encja."""
        return UserProfileEntity(
            name=model.name,
            personality_type=PersonalityType(model.personality_type),
            pacing_multiplier=model.pacing_multiplier,
            notifications=NotificationSettings(
                enabled=model.notifications_enabled,
                method=NotificationMethod(model.notification_method),
                time=model.notification_time,
            ),
            streak=model.streak,
            last_login_date=model.last_login_date,
        )

    def load_profile(self, user_id: int) -> Optional[UserProfileEntity]:
        try:
            model = UserProfileModel.objects.get(user_id=user_id)
        except UserProfileModel.DoesNotExist:
            return None
        except DatabaseError as e:
            logger.exception("Loading profile of user %s failed", user_id)
            raise RepositoryFailure("Could not load profile", cause=e) from e
        return self.to_entity(model)

    def save_profile(self, user_id: int, profile: UserProfileEntity) -> UserProfileEntity:
        data = {
            'name': profile.name,
            'personality_type': profile.personality_type.value,
            'pacing_multiplier': profile.pacing_multiplier,
            'notifications_enabled': profile.notifications.enabled,
            'notification_method': profile.notifications.method.value,
            'notification_time': profile.notifications.time,
            'streak': profile.streak,
            'last_login_date': profile.last_login_date,
        }
        try:
            obj, _ = UserProfileModel.objects.update_or_create(user_id=user_id, defaults=data)
        except DatabaseError as e:
            logger.exception("Saving profile of user %s failed", user_id)
            raise RepositoryFailure("Could not save profile", cause=e) from e
        return self.to_entity(obj)

    def update_streak(self, user_id: int, streak: int, last_login_date: date) -> None:
        try:
            UserProfileModel.objects.filter(user_id=user_id).update(
                streak=streak,
                last_login_date=last_login_date
            )
        except DatabaseError as e:
            logger.exception("Updating streak of user %s failed", user_id)
            raise RepositoryFailure("Could not update streak", cause=e) from e
