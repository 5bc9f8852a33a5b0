# Generated manually for production records
from django.conf import settings
from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('orders', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ProductionRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('transfer_date', models.DateField(db_index=True)),
                ('larvae_transferred', models.PositiveIntegerField(help_text='Larvae grafted into cell cups', validators=[django.core.validators.MinValueValidator(1)])),
                ('cells_produced', models.PositiveIntegerField(help_text='Queen cells the batch yielded')),
                ('accepted_cells', models.PositiveIntegerField(blank=True, help_text='Cells the colonies accepted; recorded once', null=True)),
                ('acceptance_date', models.DateField(blank=True, null=True)),
                ('hives_used', models.JSONField(blank=True, default=list, help_text='Identifiers of the hives the larvae went into')),
                ('notes', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('active', 'Active'), ('sold', 'Sold'), ('expired', 'Expired')], db_index=True, default='active', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='productions_created', to=settings.AUTH_USER_MODEL)),
                ('order', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='productions', to='orders.customerorder')),
            ],
            options={
                'db_table': 'production_records',
                'ordering': ['-transfer_date', '-created_at'],
            },
        ),
    ]
