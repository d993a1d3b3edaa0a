# Generated manually for the initial scoring schema
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('registration', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Result',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('best_squat', models.FloatField(default=0)),
                ('best_bench', models.FloatField(default=0)),
                ('best_deadlift', models.FloatField(default=0)),
                ('total_weight', models.FloatField(default=0)),
                ('coefficient_points', models.FloatField(default=0)),
                ('squat_points', models.FloatField(default=0)),
                ('bench_points', models.FloatField(default=0)),
                ('deadlift_points', models.FloatField(default=0)),
                ('is_disqualified', models.BooleanField(default=False)),
                ('disqualification_reason', models.CharField(blank=True, max_length=120, null=True)),
                ('place_open', models.PositiveIntegerField(blank=True, null=True)),
                ('place_in_age_class', models.PositiveIntegerField(blank=True, null=True)),
                ('place_in_weight_class', models.PositiveIntegerField(blank=True, null=True)),
                ('calculated_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('registration', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='result', to='registration.registration')),
            ],
            options={
                'ordering': ('place_open', '-coefficient_points', 'id'),
            },
        ),
        migrations.CreateModel(
            name='ReshelCoefficient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('gender', models.CharField(choices=[('Male', 'Male'), ('Female', 'Female')], max_length=10)),
                ('bodyweight', models.DecimalField(decimal_places=2, max_digits=6)),
                ('coefficient', models.FloatField()),
            ],
            options={
                'ordering': ('gender', 'bodyweight'),
                'unique_together': {('gender', 'bodyweight')},
            },
        ),
        migrations.CreateModel(
            name='McCulloughCoefficient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('age', models.PositiveSmallIntegerField(unique=True)),
                ('coefficient', models.FloatField()),
            ],
            options={
                'ordering': ('age',),
            },
        ),
    ]
