# Generated manually for customer orders
from django.conf import settings
from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='CustomerOrder',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('customer_name', models.CharField(db_index=True, max_length=200)),
                ('number_of_cells', models.PositiveIntegerField(help_text='Queen cells requested by the customer', validators=[django.core.validators.MinValueValidator(1)])),
                ('delivery_date', models.DateField(db_index=True)),
                ('larvae_transfer_date', models.DateField(db_index=True, help_text="Planned grafting date for this order's larvae")),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('in_production', 'In Production'), ('ready', 'Ready'), ('delivered', 'Delivered'), ('insufficient', 'Insufficient'), ('partial', 'Partial')], db_index=True, default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='orders_created', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'customer_orders',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='customerorder',
            index=models.Index(fields=['status', 'larvae_transfer_date'], name='customer_or_status_5f1c2a_idx'),
        ),
    ]
