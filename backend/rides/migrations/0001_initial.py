import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('chairs', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Ride',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('pickup_latitude', models.DecimalField(decimal_places=6, max_digits=10)),
                ('pickup_longitude', models.DecimalField(decimal_places=6, max_digits=10)),
                ('destination_latitude', models.DecimalField(decimal_places=6, max_digits=10)),
                ('destination_longitude', models.DecimalField(decimal_places=6, max_digits=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('chair', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='rides', to='chairs.chair')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rides', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'rides',
                'ordering': ['created_at', 'id'],
                'indexes': [models.Index(fields=['chair', 'created_at'], name='rides_chair_created_idx')],
            },
        ),
        migrations.CreateModel(
            name='RideStatus',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('MATCHING', 'Matching'), ('ENROUTE', 'En route to pickup'), ('PICKUP', 'Picked up'), ('CARRYING', 'Carrying'), ('ARRIVED', 'Arrived'), ('COMPLETED', 'Completed')], max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('app_sent_at', models.DateTimeField(blank=True, null=True)),
                ('chair_sent_at', models.DateTimeField(blank=True, null=True)),
                ('ride', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='statuses', to='rides.ride')),
            ],
            options={
                'db_table': 'ride_statuses',
                'ordering': ['created_at', 'id'],
                'constraints': [models.UniqueConstraint(fields=('ride', 'status'), name='unique_ride_status')],
            },
        ),
    ]
