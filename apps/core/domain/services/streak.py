from dataclasses import replace
from datetime import date

from apps.core.domain.entities import UserProfileEntity


class StreakTracker:
    def track(self, profile: UserProfileEntity, today: date) -> UserProfileEntity:
        """
        Liczy serię dziennych logowań.
        Wczoraj -> streak+1, dawniej -> reset do 1, dzisiaj -> bez zmian.
        """
        # Już liczone dzisiaj (np. przeładowanie strony)
        if profile.last_login_date == today:
            return profile

        # Brak daty -> traktujemy jak "dzisiaj" (diff = 0)
        last_login = profile.last_login_date or today
        diff = (today - last_login).days

        if diff == 1:
            streak = (profile.streak or 0) + 1
        elif diff > 1:
            streak = 1
        else:
            # diff <= 0: brak daty albo zegar cofnięty
            streak = profile.streak or 1

        return replace(profile, streak=streak, last_login_date=today)
