from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from apps.core.domain.entities import UserProfileEntity


class IProfileRepository(ABC):
    @abstractmethod
    def load_profile(self, user_id: int) -> Optional[UserProfileEntity]:
        pass

    @abstractmethod
    def save_profile(self, user_id: int, profile: UserProfileEntity) -> UserProfileEntity:
        """Tworzy lub nadpisuje profil użytkownika."""
        pass

    @abstractmethod
    def update_streak(self, user_id: int, streak: int, last_login_date: date) -> None:
        """Zapisuje tylko pola serii (bez reszty profilu)."""
        pass
