from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.core.domain.calendar import parse_datetime
from apps.core.domain.exceptions import InvalidDate
from apps.goals.adapters.orm_repositories import DjangoGoalRepository
from apps.recurrence.application.use_cases import RecurrenceSweepUseCase
from apps.todos.adapters.orm_repositories import DjangoTodoRepository


class Command(BaseCommand):
    help = 'Generuje następne instancje powtarzalnych celów i zadań todo'

    def add_arguments(self, parser):
        parser.add_argument('--now', help="Moment przeglądu (ISO-8601), domyślnie teraz")

    def handle(self, *args, **options):
        now = timezone.localtime()  # "dziś" liczymy w strefie TIME_ZONE, nie w UTC
        if options.get('now'):
            try:
                now = parse_datetime(options['now'], tzinfo=timezone.get_current_timezone())
            except InvalidDate as exc:
                raise CommandError(str(exc))

        config = getattr(settings, 'GOAL_TRACKER', {})
        service = RecurrenceSweepUseCase(
            DjangoGoalRepository(),
            DjangoTodoRepository(),
            max_occurrences=config.get('RECURRENCE_MAX_OCCURRENCES', 365),
        )
        result = service.execute(now)

        self.stdout.write(self.style.SUCCESS(
            f'Wygenerowano {len(result.goals_created)} celów i {len(result.todos_created)} zadań cyklicznych.'
        ))
        for g in result.goals_created:
            self.stdout.write(f"- cel: {g.title} ({g.start_date} - {g.end_date})")
        for t in result.todos_created:
            self.stdout.write(f"- todo: {t.title} ({t.deadline})")
        for error in result.errors:
            self.stderr.write(self.style.ERROR(error))
