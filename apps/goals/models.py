# apps/goals/models.py
from django.db import models
from django.conf import settings


class Goal(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.CASCADE)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    # Używamy TextChoices dla wygody w Adminie, ale mapujemy to na Enum domenowy
    class GoalTypeChoices(models.TextChoices):
        ACHIEVEMENT = 'achievement', 'Osiągnięcie'
        LIMITING = 'limiting', 'Limit'

    class MetricTypeChoices(models.TextChoices):
        TIME = 'time', 'Czas (h)'
        COUNT = 'count', 'Liczba'

    class PeriodTypeChoices(models.TextChoices):
        WEEK = 'week', 'Tydzień'
        MONTH = 'month', 'Miesiąc'
        THREE_MONTHS = '3months', '3 miesiące'
        SIX_MONTHS = '6months', '6 miesięcy'
        YEAR = 'year', 'Rok'
        CUSTOM = 'custom', 'Własny'

    class RecurrencePatternChoices(models.TextChoices):
        DAILY = 'daily', 'Codziennie'
        WEEKLY = 'weekly', 'Co tydzień'
        WORK_WEEKLY = 'work-weekly', 'Dni robocze'
        CUSTOM_WEEKLY = 'custom-weekly', 'Wybrane dni tygodnia'
        MONTHLY = 'monthly', 'Co miesiąc'
        CUSTOM_MONTHLY = 'custom-monthly', 'Wybrany dzień miesiąca'
        QUARTERLY = 'quarterly', 'Co kwartał'
        YEARLY = 'yearly', 'Co rok'

    goal_type = models.CharField(max_length=20, choices=GoalTypeChoices.choices)
    metric_type = models.CharField(max_length=20, choices=MetricTypeChoices.choices)
    target_value = models.FloatField(help_text="Godziny (time) albo liczba (count)")

    period_type = models.CharField(
        max_length=20,
        choices=PeriodTypeChoices.choices,
        default=PeriodTypeChoices.CUSTOM
    )
    start_date = models.DateField()
    end_date = models.DateField()

    # Luźne powiązanie z taksonomią aktywności (tekst, nie FK)
    activity_title = models.CharField(max_length=200, null=True, blank=True)
    activity_category = models.CharField(max_length=200, null=True, blank=True)

    color = models.CharField(max_length=50, null=True, blank=True)
    icon = models.CharField(max_length=50, null=True, blank=True)

    is_active = models.BooleanField(default=True)

    # Powtarzanie
    is_recurring = models.BooleanField(default=False)
    recurrence_pattern = models.CharField(
        max_length=20,
        choices=RecurrencePatternChoices.choices,
        null=True, blank=True
    )
    # {"daysOfWeek": [1, 3]} albo {"dayOfMonth": 15}
    recurrence_config = models.JSONField(null=True, blank=True)

    # Poprzednik w łańcuchu powtórzeń
    parent_goal = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='successors'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class Log(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.CASCADE)

    activity_title = models.CharField(max_length=200)
    activity_category = models.CharField(max_length=200, null=True, blank=True)

    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True, help_text="Puste = aktywność trwa")

    # Odwołanie (nie własność) - usunięcie celu nie usuwa logów
    goal = models.ForeignKey(Goal, null=True, blank=True, on_delete=models.SET_NULL, related_name='logs')
    goal_count = models.FloatField(null=True, blank=True, help_text="Wkład dla celów typu count")

    tags = models.CharField(max_length=255, blank=True, default='')
    comment = models.TextField(blank=True)

    class Meta:
        ordering = ['-start_time']
        indexes = [
            models.Index(fields=['goal', 'start_time'], name='goals_log_goal_start_idx'),
        ]

    def __str__(self):
        return f"{self.activity_title} ({self.start_time:%Y-%m-%d %H:%M})"
