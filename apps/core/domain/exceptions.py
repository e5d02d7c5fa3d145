class PaceMakerError(Exception):
    """Bazowy wyjątek domeny."""


class NotFound(PaceMakerError):
    """Brak celu / kamienia milowego o podanym ID."""


class ValidationFailure(PaceMakerError):
    """Dane odrzucone zanim trafią do modelu."""


class RepositoryFailure(PaceMakerError):
    """Błąd warstwy zapisu. Oryginalna przyczyna w `cause` (oraz __cause__)."""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause
