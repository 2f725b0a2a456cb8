# apps/core/domain/exceptions.py


class GoalEngineError(ValueError):
    """Błąd danych wejściowych silnika celów (nie błąd operacyjny)."""


class InvalidDate(GoalEngineError):
    """Data nie daje się sparsować albo end_date < start_date."""


class InvalidGoal(GoalEngineError):
    """target_value <= 0 albo goal_type/metric_type spoza słownika."""


class InvalidRecurrence(GoalEngineError):
    """Niepoprawny opis powtarzania (np. custom-weekly bez dni)."""


class SeriesEnded(Exception):
    """
    Seria powtórzeń się skończyła.
    To nie jest błąd - normalny sygnał końca z resolvera.
    """

    def __init__(self, occurrence_index=None, reason=""):
        self.occurrence_index = occurrence_index
        self.reason = reason
        super().__init__(reason or "Recurrence series has ended")
