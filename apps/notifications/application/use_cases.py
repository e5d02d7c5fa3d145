import logging
from dataclasses import dataclass
from typing import Optional

from apps.core.domain.exceptions import NotFound
from apps.core.ports.repositories import IProfileRepository
from apps.core.ports.translator import ITranslator
from apps.goals.ports.repositories import IGoalRepository
from apps.notifications.ports.notifier import EmailPayload, INotifier

logger = logging.getLogger(__name__)


@dataclass
class SendProgressUpdateInput:
    user_id: int
    email: str
    message: Optional[str] = None


class SendProgressUpdateUseCase:
    def __init__(
            self,
            goals: IGoalRepository,
            profiles: IProfileRepository,
            notifier: INotifier,
            translator: ITranslator
    ):
        self.goals = goals
        self.profiles = profiles
        self.notifier = notifier
        self.translator = translator

    def execute(self, input_dto: SendProgressUpdateInput) -> bool:
        goal = self.goals.load_latest_goal(input_dto.user_id)
        if goal is None:
            raise NotFound(f"User {input_dto.user_id} has no goal")

        profile = self.profiles.load_profile(input_dto.user_id)
        username = profile.name if profile else "User"

        payload = EmailPayload(
            email=input_dto.email,
            username=username,
            goal_title=goal.title,
            message=input_dto.message or self.translator.translate('email.default_message'),
            progress_percent=goal.progress,
        )
        sent = self.notifier.send(payload)
        if not sent:
            logger.warning("Progress update for user %s was not sent", input_dto.user_id)
        return sent
