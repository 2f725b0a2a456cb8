# apps/todos/adapters/orm_repositories.py
from typing import List

from apps.todos.domain.entities import TodoEntity
from apps.todos.models import Todo as TodoModel
from apps.todos.ports.repositories import ITodoRepository


class DjangoTodoRepository(ITodoRepository):
    def to_entity(self, model: TodoModel) -> TodoEntity:
        """Konwertuje Model Django -> Czystą Encję."""
        return TodoEntity(
            id=model.id,
            title=model.title,
            description=model.description,
            urgency=model.urgency,
            importance=model.importance,
            work_date=model.work_date,
            deadline=model.deadline,
            done=model.done,
            activity_title=model.activity_title,
            activity_category=model.activity_category,
            contact_ids=list(model.contact_ids or []),
            place_ids=list(model.place_ids or []),
            goal_ids=list(model.goal_ids or []),
            user_id=model.user_id,
            is_recurring=model.is_recurring,
            recurrence_pattern=model.recurrence_pattern,
            recurrence_interval=model.recurrence_interval,
            weekly_days=list(model.weekly_days or []),
            day_of_month=model.day_of_month,
            recurrence_count=model.recurrence_count,
            recurrence_end_date=model.recurrence_end_date,
            work_date_offset=model.work_date_offset,
            recurrence_group_id=model.recurrence_group_id,
            occurrence_index=model.occurrence_index,
        )

    def create(self, todo: TodoEntity) -> TodoEntity:
        obj = TodoModel.objects.create(
            user_id=todo.user_id,
            title=todo.title,
            description=todo.description or '',
            urgency=todo.urgency,
            importance=todo.importance,
            work_date=todo.work_date,
            deadline=todo.deadline,
            done=todo.done,
            activity_title=todo.activity_title,
            activity_category=todo.activity_category,
            contact_ids=list(todo.contact_ids),
            place_ids=list(todo.place_ids),
            goal_ids=list(todo.goal_ids),
            is_recurring=todo.is_recurring,
            recurrence_pattern=todo.recurrence_pattern,
            recurrence_interval=todo.recurrence_interval or 1,
            weekly_days=list(todo.weekly_days),
            day_of_month=todo.day_of_month,
            recurrence_count=todo.recurrence_count,
            recurrence_end_date=todo.recurrence_end_date,
            work_date_offset=todo.work_date_offset or 0,
            recurrence_group_id=todo.recurrence_group_id,
            occurrence_index=todo.occurrence_index,
        )
        return self.to_entity(obj)

    def list_recurring(self) -> List[TodoEntity]:
        qs = TodoModel.objects.filter(is_recurring=True).order_by('recurrence_group_id', 'occurrence_index')
        return [self.to_entity(t) for t in qs]
