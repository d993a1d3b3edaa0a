# Generated manually for the live contest state
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('contests', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ContestState',
            fields=[
                ('contest', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name='state', serialize=False, to='contests.contest')),
                ('status', models.CharField(choices=[('Setup', 'Preparación'), ('InProgress', 'En curso'), ('Paused', 'Pausado'), ('Completed', 'Finalizado')], default='Setup', max_length=20)),
                ('current_lift', models.CharField(blank=True, choices=[('Squat', 'Squat'), ('Bench', 'Bench'), ('Deadlift', 'Deadlift')], max_length=10, null=True)),
                ('current_round', models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('current_attempt_number', models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(4)])),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
        ),
    ]
