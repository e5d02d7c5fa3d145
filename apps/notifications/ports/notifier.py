from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class EmailPayload:
    email: str
    username: str
    goal_title: str
    message: str
    progress_percent: int


class INotifier(ABC):
    @abstractmethod
    def send(self, payload: EmailPayload) -> bool:
        """True = wysłano. Stan doręczenia nas nie interesuje."""
        pass
