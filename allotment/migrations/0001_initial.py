"""
Initial migration for Allotment models.
"""

import datetime
import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Allotment models: Warehouse, InventoryBatch, AllocationRequest, Dispatch."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Warehouse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.SlugField(help_text='Unique identifier (e.g. nashik-cold)', unique=True, verbose_name='Code')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('location', models.CharField(blank=True, default='', max_length=255, verbose_name='Location')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadata')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Warehouse',
                'verbose_name_plural': 'Warehouses',
                'ordering': ['code'],
            },
        ),
        migrations.CreateModel(
            name='InventoryBatch',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('code', models.CharField(max_length=50, unique=True, verbose_name='Lot code')),
                ('commodity', models.CharField(db_index=True, max_length=100, verbose_name='Commodity')),
                ('variety', models.CharField(blank=True, default='', max_length=100, verbose_name='Variety')),
                ('remaining_quantity', models.DecimalField(decimal_places=3, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))], verbose_name='Remaining quantity')),
                ('unit', models.CharField(default='kg', max_length=20, verbose_name='Unit')),
                ('intake_date', models.DateField(default=datetime.date.today, verbose_name='Intake date')),
                ('shelf_life_days', models.PositiveIntegerField(default=0, help_text='Estimated days the lot stays usable after intake', verbose_name='Shelf life (days)')),
                ('risk_score', models.PositiveSmallIntegerField(default=0, help_text='0-100, higher = closer to spoilage', validators=[django.core.validators.MaxValueValidator(100)], verbose_name='Risk score')),
                ('zone', models.CharField(blank=True, default='', max_length=50, verbose_name='Storage zone')),
                ('status', models.CharField(choices=[('active', 'Active'), ('dispatched', 'Dispatched'), ('expired', 'Expired')], db_index=True, default='active', max_length=20, verbose_name='Status')),
                ('dispatch_date', models.DateTimeField(blank=True, help_text='Set when the lot is fully allocated', null=True, verbose_name='Dispatch date')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('warehouse', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='batches', to='allotment.warehouse', verbose_name='Warehouse')),
            ],
            options={
                'verbose_name': 'Inventory batch',
                'verbose_name_plural': 'Inventory batches',
                'ordering': ['intake_date', 'created_at'],
                'indexes': [
                    models.Index(fields=['commodity', 'status'], name='allot_batch_commodity_status'),
                    models.Index(fields=['warehouse', 'status'], name='allot_batch_wh_status'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AllocationRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('code', models.CharField(max_length=30, unique=True, verbose_name='Request code')),
                ('commodity', models.CharField(max_length=100, verbose_name='Commodity')),
                ('variety', models.CharField(blank=True, default='', max_length=100, verbose_name='Variety')),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Quantity')),
                ('unit', models.CharField(default='kg', max_length=20, verbose_name='Unit')),
                ('deadline', models.DateTimeField(blank=True, null=True, verbose_name='Deadline')),
                ('destination', models.CharField(max_length=255, verbose_name='Destination')),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name='Offered price')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Notes')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('reviewing', 'Reviewing'), ('allocated', 'Allocated'), ('dispatched', 'Dispatched'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], db_index=True, default='pending', max_length=20, verbose_name='Status')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('requester', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='allocation_requests', to=settings.AUTH_USER_MODEL, verbose_name='Requester')),
                ('warehouse', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='allocation_requests', to='allotment.warehouse', verbose_name='Warehouse')),
            ],
            options={
                'verbose_name': 'Allocation request',
                'verbose_name_plural': 'Allocation requests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['commodity', 'status'], name='allot_request_commodity_status'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Dispatch',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('code', models.CharField(max_length=30, unique=True, verbose_name='Shipment code')),
                ('destination', models.CharField(max_length=255, verbose_name='Destination')),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Quantity')),
                ('unit', models.CharField(default='kg', max_length=20, verbose_name='Unit')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('in-transit', 'In transit'), ('delivered', 'Delivered'), ('cancelled', 'Cancelled')], db_index=True, default='pending', max_length=20, verbose_name='Status')),
                ('dispatched_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Dispatched at')),
                ('estimated_delivery', models.DateTimeField(blank=True, null=True, verbose_name='Estimated delivery')),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('batch', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='dispatches', to='allotment.inventorybatch', verbose_name='Batch')),
                ('request', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='dispatches', to='allotment.allocationrequest', verbose_name='Allocation request')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Last updated by')),
            ],
            options={
                'verbose_name': 'Dispatch',
                'verbose_name_plural': 'Dispatches',
                'ordering': ['-dispatched_at'],
            },
        ),
    ]
