# Generated manually for the initial contests schema
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Contest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('slug', models.SlugField(max_length=200, unique=True)),
                ('date', models.DateField()),
                ('location', models.CharField(blank=True, default='', max_length=200)),
                ('discipline', models.CharField(choices=[('Powerlifting', 'Powerlifting'), ('Squat', 'Squat'), ('Bench', 'Bench'), ('Deadlift', 'Deadlift')], default='Powerlifting', max_length=20)),
                ('status', models.CharField(choices=[('Setup', 'Preparación'), ('InProgress', 'En curso'), ('Paused', 'Pausado'), ('Completed', 'Finalizado')], default='Setup', max_length=20)),
                ('competition_type', models.CharField(blank=True, default='', help_text='Ej. Local, Nacional.', max_length=60)),
                ('mens_bar_weight', models.DecimalField(decimal_places=2, default=Decimal('20.00'), max_digits=5)),
                ('womens_bar_weight', models.DecimalField(decimal_places=2, default=Decimal('15.00'), max_digits=5)),
                ('clamp_weight', models.DecimalField(decimal_places=2, default=Decimal('2.50'), help_text='Peso de cada clip (kg).', max_digits=5)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
            ],
            options={
                'ordering': ('-date', 'name'),
            },
        ),
        migrations.CreateModel(
            name='ContestAgeCategory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=32)),
                ('name', models.CharField(blank=True, default='', max_length=100)),
                ('min_age', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('max_age', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('sort_order', models.IntegerField(default=0)),
                ('contest', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='age_categories', to='contests.contest')),
            ],
            options={
                'ordering': ('contest_id', 'sort_order', 'id'),
                'unique_together': {('contest', 'code')},
            },
        ),
        migrations.CreateModel(
            name='ContestWeightClass',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=32)),
                ('name', models.CharField(blank=True, default='', max_length=100)),
                ('gender', models.CharField(choices=[('Male', 'Male'), ('Female', 'Female')], max_length=10)),
                ('min_weight', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('max_weight', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('sort_order', models.IntegerField(default=0)),
                ('contest', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='weight_classes', to='contests.contest')),
            ],
            options={
                'ordering': ('contest_id', 'gender', 'sort_order', 'id'),
                'unique_together': {('contest', 'gender', 'code')},
            },
        ),
        migrations.CreateModel(
            name='PlateSet',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('plate_weight', models.DecimalField(decimal_places=2, max_digits=5)),
                ('quantity', models.PositiveIntegerField(default=0, help_text='Pares disponibles.')),
                ('color', models.CharField(blank=True, default='', max_length=16)),
                ('contest', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='plates', to='contests.contest')),
            ],
            options={
                'ordering': ('contest_id', '-plate_weight'),
                'unique_together': {('contest', 'plate_weight')},
            },
        ),
        migrations.CreateModel(
            name='ContestTag',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('label', models.CharField(max_length=60)),
                ('contest', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tags', to='contests.contest')),
            ],
            options={
                'ordering': ('contest_id', 'label'),
                'unique_together': {('contest', 'label')},
            },
        ),
    ]
