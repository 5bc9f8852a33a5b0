# Generated manually for surplus stock packages and sales
from django.conf import settings
from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('production', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='StockPackage',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('total_cells', models.PositiveIntegerField()),
                ('available_cells', models.PositiveIntegerField()),
                ('sold_cells', models.PositiveIntegerField(default=0)),
                ('origin_hives', models.JSONField(blank=True, default=list)),
                ('production_date', models.DateField()),
                ('expiration_date', models.DateTimeField(db_index=True, help_text='End of the last sellable day')),
                ('is_expired', models.BooleanField(db_index=True, default=False)),
                ('expired_at', models.DateTimeField(blank=True, help_text='When the expiration sweep closed this package', null=True)),
                ('forfeited_cells', models.PositiveIntegerField(default=0, help_text='Unsold cells zeroed at expiration')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('production', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='stock_package', to='production.productionrecord')),
            ],
            options={
                'db_table': 'stock_packages',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='StockSale',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('customer_name', models.CharField(max_length=200)),
                ('cells_sold', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('sale_date', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('package', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sales', to='stock.stockpackage')),
                ('sold_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='stock_sales', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'stock_sales',
                'ordering': ['sale_date'],
            },
        ),
        migrations.AddIndex(
            model_name='stockpackage',
            index=models.Index(fields=['is_expired', 'expiration_date'], name='stock_packa_is_expi_3b8e41_idx'),
        ),
    ]
