from django.apps import AppConfig

class RecurrenceConfig(AppConfig):
    # Bez modeli - tylko serwisy i komenda run_daily_recurrence
    name = 'apps.recurrence'
    label = 'recurrence'
