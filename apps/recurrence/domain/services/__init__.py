# apps/recurrence/domain/services/__init__.py
# Generator importujemy wprost (apps.recurrence.domain.services.generator),
# bo zależy od apps.goals.domain.services, które same używają resolvera.
from .resolver import iter_occurrences, next_occurrence, validate_descriptor
