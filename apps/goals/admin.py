from django.contrib import admin
from .models import Goal, Log


class LogInline(admin.TabularInline):
    model = Log
    extra = 0
    fields = ('activity_title', 'start_time', 'end_time', 'goal_count')


@admin.register(Goal)
class GoalAdmin(admin.ModelAdmin):
    list_display = ('title', 'goal_type', 'metric_type', 'target_value', 'start_date', 'end_date', 'is_active', 'is_recurring')
    list_filter = ('goal_type', 'metric_type', 'period_type', 'is_active', 'is_recurring')
    search_fields = ('title', 'activity_title')
    inlines = [LogInline]


@admin.register(Log)
class LogAdmin(admin.ModelAdmin):
    list_display = ('activity_title', 'start_time', 'end_time', 'goal', 'goal_count')
    list_filter = ('activity_category',)
    search_fields = ('activity_title', 'tags')
