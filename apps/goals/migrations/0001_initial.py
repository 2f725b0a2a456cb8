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
            name='Goal',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('goal_type', models.CharField(choices=[('achievement', 'Osiągnięcie'), ('limiting', 'Limit')], max_length=20)),
                ('metric_type', models.CharField(choices=[('time', 'Czas (h)'), ('count', 'Liczba')], max_length=20)),
                ('target_value', models.FloatField(help_text='Godziny (time) albo liczba (count)')),
                ('period_type', models.CharField(choices=[('week', 'Tydzień'), ('month', 'Miesiąc'), ('3months', '3 miesiące'), ('6months', '6 miesięcy'), ('year', 'Rok'), ('custom', 'Własny')], default='custom', max_length=20)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('activity_title', models.CharField(blank=True, max_length=200, null=True)),
                ('activity_category', models.CharField(blank=True, max_length=200, null=True)),
                ('color', models.CharField(blank=True, max_length=50, null=True)),
                ('icon', models.CharField(blank=True, max_length=50, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('is_recurring', models.BooleanField(default=False)),
                ('recurrence_pattern', models.CharField(blank=True, choices=[('daily', 'Codziennie'), ('weekly', 'Co tydzień'), ('work-weekly', 'Dni robocze'), ('custom-weekly', 'Wybrane dni tygodnia'), ('monthly', 'Co miesiąc'), ('custom-monthly', 'Wybrany dzień miesiąca'), ('quarterly', 'Co kwartał'), ('yearly', 'Co rok')], max_length=20, null=True)),
                ('recurrence_config', models.JSONField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('parent_goal', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='successors', to='goals.goal')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Log',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('activity_title', models.CharField(max_length=200)),
                ('activity_category', models.CharField(blank=True, max_length=200, null=True)),
                ('start_time', models.DateTimeField()),
                ('end_time', models.DateTimeField(blank=True, help_text='Puste = aktywność trwa', null=True)),
                ('goal_count', models.FloatField(blank=True, help_text='Wkład dla celów typu count', null=True)),
                ('tags', models.CharField(blank=True, default='', max_length=255)),
                ('comment', models.TextField(blank=True)),
                ('goal', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='logs', to='goals.goal')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-start_time'],
                'indexes': [models.Index(fields=['goal', 'start_time'], name='goals_log_goal_start_idx')],
            },
        ),
    ]
