# apps/todos/models.py
from django.db import models
from django.conf import settings


class Todo(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.CASCADE)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    # Priorytet = urgency * importance
    urgency = models.PositiveIntegerField(default=1)
    importance = models.PositiveIntegerField(default=1)

    work_date = models.DateField(null=True, blank=True)
    deadline = models.DateField(null=True, blank=True)
    done = models.BooleanField(default=False)

    activity_title = models.CharField(max_length=200, null=True, blank=True)
    activity_category = models.CharField(max_length=200, null=True, blank=True)

    # Kontakty/miejsca/cele żyją poza tym modułem - trzymamy tylko ID
    contact_ids = models.JSONField(default=list, blank=True)
    place_ids = models.JSONField(default=list, blank=True)
    goal_ids = models.JSONField(default=list, blank=True)

    # Powtarzanie
    is_recurring = models.BooleanField(default=False)
    recurrence_pattern = models.CharField(max_length=20, null=True, blank=True)
    recurrence_interval = models.PositiveIntegerField(default=1, help_text="Co ile? (np. co 2 tygodnie)")
    weekly_days = models.JSONField(default=list, blank=True)  # 0 = niedziela
    day_of_month = models.PositiveSmallIntegerField(null=True, blank=True)

    # Warunki końca
    recurrence_count = models.PositiveIntegerField(null=True, blank=True, help_text="Zakończ po X wystąpieniach")
    recurrence_end_date = models.DateField(null=True, blank=True)

    work_date_offset = models.PositiveIntegerField(default=0, help_text="Ile dni przed deadlinem")
    recurrence_group_id = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    occurrence_index = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['deadline', 'id']

    def __str__(self):
        return self.title

    @property
    def priority(self):
        return self.urgency * self.importance
