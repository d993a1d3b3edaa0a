# Generated manually for the initial registration schema
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('contests', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Competitor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(max_length=100)),
                ('last_name', models.CharField(max_length=100)),
                ('birth_date', models.DateField(blank=True, null=True)),
                ('gender', models.CharField(choices=[('Male', 'Male'), ('Female', 'Female')], max_length=10)),
                ('club', models.CharField(blank=True, default='', max_length=120)),
                ('city', models.CharField(blank=True, default='', max_length=120)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
            ],
            options={
                'ordering': ('last_name', 'first_name', 'id'),
            },
        ),
        migrations.CreateModel(
            name='Registration',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('bodyweight', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('lot_number', models.PositiveIntegerField(blank=True, null=True)),
                ('reshel_coefficient', models.FloatField(blank=True, null=True)),
                ('mccullough_coefficient', models.FloatField(blank=True, null=True)),
                ('flight_code', models.CharField(blank=True, default='', max_length=8)),
                ('flight_order', models.PositiveIntegerField(blank=True, null=True)),
                ('labels', models.JSONField(blank=True, default=list)),
                ('rack_height_squat', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('rack_height_bench', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('contest', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='registrations', to='contests.contest')),
                ('competitor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='registrations', to='registration.competitor')),
                ('age_category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='registrations', to='contests.contestagecategory')),
                ('weight_class', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='registrations', to='contests.contestweightclass')),
            ],
            options={
                'ordering': ('contest_id', 'flight_code', 'flight_order', 'lot_number', 'id'),
                'unique_together': {('contest', 'competitor')},
            },
        ),
    ]
