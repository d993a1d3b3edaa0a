# Generated manually for the initial judging schema
import django.core.validators
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
            name='Attempt',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('lift', models.CharField(choices=[('Squat', 'Squat'), ('Bench', 'Bench'), ('Deadlift', 'Deadlift')], max_length=10)),
                ('attempt_number', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(4)])),
                ('weight', models.DecimalField(decimal_places=2, max_digits=6)),
                ('status', models.CharField(choices=[('Pending', 'Pending'), ('Successful', 'Successful'), ('Failed', 'Failed')], default='Pending', max_length=12)),
                ('judge_left', models.BooleanField(blank=True, choices=[(None, '—'), (True, 'Válido'), (False, 'Nulo')], null=True)),
                ('judge_center', models.BooleanField(blank=True, choices=[(None, '—'), (True, 'Válido'), (False, 'Nulo')], null=True)),
                ('judge_right', models.BooleanField(blank=True, choices=[(None, '—'), (True, 'Válido'), (False, 'Nulo')], null=True)),
                ('notes', models.CharField(blank=True, default='', max_length=200)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('registration', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attempts', to='registration.registration')),
            ],
            options={
                'ordering': ('registration_id', 'lift', 'attempt_number'),
                'unique_together': {('registration', 'lift', 'attempt_number')},
            },
        ),
    ]
