from django.contrib import admin
from .models import Todo


@admin.register(Todo)
class TodoAdmin(admin.ModelAdmin):
    list_display = ('title', 'deadline', 'work_date', 'done', 'is_recurring', 'recurrence_pattern', 'occurrence_index')
    list_filter = ('done', 'is_recurring', 'recurrence_pattern')
    search_fields = ('title', 'recurrence_group_id')
