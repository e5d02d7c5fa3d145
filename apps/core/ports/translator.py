from abc import ABC, abstractmethod


class ITranslator(ABC):
    @abstractmethod
    def translate(self, key: str) -> str:
        """Zwraca zlokalizowany tekst dla klucza (np. 'adjustment.intensified')."""
        pass
