from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Todo',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('urgency', models.PositiveIntegerField(default=1)),
                ('importance', models.PositiveIntegerField(default=1)),
                ('work_date', models.DateField(blank=True, null=True)),
                ('deadline', models.DateField(blank=True, null=True)),
                ('done', models.BooleanField(default=False)),
                ('activity_title', models.CharField(blank=True, max_length=200, null=True)),
                ('activity_category', models.CharField(blank=True, max_length=200, null=True)),
                ('contact_ids', models.JSONField(blank=True, default=list)),
                ('place_ids', models.JSONField(blank=True, default=list)),
                ('goal_ids', models.JSONField(blank=True, default=list)),
                ('is_recurring', models.BooleanField(default=False)),
                ('recurrence_pattern', models.CharField(blank=True, max_length=20, null=True)),
                ('recurrence_interval', models.PositiveIntegerField(default=1, help_text='Co ile? (np. co 2 tygodnie)')),
                ('weekly_days', models.JSONField(blank=True, default=list)),
                ('day_of_month', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('recurrence_count', models.PositiveIntegerField(blank=True, help_text='Zakończ po X wystąpieniach', null=True)),
                ('recurrence_end_date', models.DateField(blank=True, null=True)),
                ('work_date_offset', models.PositiveIntegerField(default=0, help_text='Ile dni przed deadlinem')),
                ('recurrence_group_id', models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ('occurrence_index', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['deadline', 'id'],
            },
        ),
    ]
