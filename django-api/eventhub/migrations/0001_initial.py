import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="UserAccount",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(max_length=254)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("participant", "Participant"),
                            ("organizer", "Organizer"),
                            ("vendor", "Vendor"),
                            ("admin", "Admin"),
                        ],
                        default="participant",
                        max_length=20,
                    ),
                ),
                ("wallet_balance", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "user",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="account",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "users",
            },
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("tagline", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                (
                    "event_type",
                    models.CharField(
                        choices=[("individual", "Individual"), ("team", "Team")],
                        max_length=20,
                    ),
                ),
                (
                    "event_level",
                    models.CharField(
                        choices=[
                            ("college", "College"),
                            ("inter_college", "Inter College"),
                            ("state", "State"),
                            ("national", "National"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "event_mode",
                    models.CharField(
                        choices=[("online", "Online"), ("offline", "Offline"), ("hybrid", "Hybrid")],
                        max_length=20,
                    ),
                ),
                ("registration_start", models.DateTimeField(blank=True, null=True)),
                ("registration_end", models.DateTimeField(blank=True, null=True)),
                ("event_start", models.DateTimeField(blank=True, null=True)),
                ("event_end", models.DateTimeField(blank=True, null=True)),
                ("result_date", models.DateTimeField(blank=True, null=True)),
                ("venue_name", models.CharField(blank=True, max_length=255, null=True)),
                ("venue_address", models.TextField(blank=True, null=True)),
                ("platform_name", models.CharField(blank=True, max_length=255, null=True)),
                ("meeting_link", models.URLField(blank=True, max_length=500, null=True)),
                ("contact_email", models.EmailField(blank=True, max_length=254, null=True)),
                ("contact_phone", models.CharField(blank=True, max_length=30, null=True)),
                ("min_team_size", models.PositiveIntegerField(default=2)),
                ("max_team_size", models.PositiveIntegerField(default=5)),
                ("max_team_size_custom", models.PositiveIntegerField(blank=True, null=True)),
                ("team_name_required", models.BooleanField(default=False)),
                (
                    "fee_type",
                    models.CharField(
                        choices=[("free", "Free"), ("paid", "Paid")],
                        default="free",
                        max_length=10,
                    ),
                ),
                (
                    "fee_structure",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("per_person", "Per Person"),
                            ("per_team_flat", "Per Team Flat"),
                            ("per_person_with_cap", "Per Person With Cap"),
                        ],
                        max_length=30,
                        null=True,
                    ),
                ),
                ("fee_per_person", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("team_flat_fee", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("team_fee_cap", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("prize_pool_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                (
                    "prize_pool_type",
                    models.CharField(
                        choices=[("monetary", "Monetary"), ("non_monetary", "Non Monetary")],
                        default="monetary",
                        max_length=20,
                    ),
                ),
                ("prize_breakdown", models.JSONField(blank=True, default=list)),
                ("certificate_types", models.JSONField(blank=True, default=list)),
                ("instagram_link", models.URLField(blank=True, max_length=500, null=True)),
                ("youtube_link", models.URLField(blank=True, max_length=500, null=True)),
                ("website_link", models.URLField(blank=True, max_length=500, null=True)),
                ("rules_and_regulations", models.TextField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("pending_approval", "Pending Approval"),
                            ("live", "Live"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("admin_notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "created_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="events",
                        to="eventhub.useraccount",
                    ),
                ),
            ],
            options={
                "db_table": "events",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["-created_at"], name="event_created_idx"),
                    models.Index(fields=["status", "-created_at"], name="event_status_created_idx"),
                    models.Index(fields=["created_by", "-created_at"], name="event_owner_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Ticket",
            fields=[
                ("code", models.CharField(max_length=32, primary_key=True, serialize=False)),
                ("registration_id", models.UUIDField(blank=True, db_index=True, null=True)),
                ("member_name", models.CharField(max_length=255)),
                ("member_email", models.EmailField(max_length=254)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("used", "Used"), ("cancelled", "Cancelled")],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("checked_in_at", models.DateTimeField(blank=True, null=True)),
                ("issued_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="tickets",
                        to="eventhub.event",
                    ),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="tickets",
                        to="eventhub.useraccount",
                    ),
                ),
                (
                    "checked_in_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="eventhub.useraccount",
                    ),
                ),
            ],
            options={
                "db_table": "tickets",
                "indexes": [
                    models.Index(fields=["owner", "-issued_at"], name="ticket_owner_issued_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Registration",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("individual", "Individual"),
                            ("team_bulk", "Team Bulk"),
                            ("team_join", "Team Join"),
                        ],
                        max_length=20,
                    ),
                ),
                ("team_code", models.CharField(blank=True, max_length=16, null=True)),
                ("team_name", models.CharField(blank=True, max_length=255, null=True)),
                ("members", models.JSONField(default=list)),
                ("total_fee", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("fee_breakdown", models.JSONField(default=dict)),
                (
                    "payment_status",
                    models.CharField(
                        choices=[("paid", "Paid"), ("pending", "Pending"), ("refunded", "Refunded")],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("registered_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registrations",
                        to="eventhub.event",
                    ),
                ),
                (
                    "team_leader",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="eventhub.useraccount",
                    ),
                ),
                (
                    "registered_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registrations",
                        to="eventhub.useraccount",
                    ),
                ),
            ],
            options={
                "db_table": "registrations",
                "ordering": ["-registered_at"],
                "indexes": [
                    models.Index(fields=["event", "-registered_at"], name="reg_event_registered_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="WalletTransaction",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "type",
                    models.CharField(
                        choices=[("credit", "Credit"), ("debit", "Debit")],
                        max_length=10,
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("description", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transactions",
                        to="eventhub.useraccount",
                    ),
                ),
                (
                    "event",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="eventhub.event",
                    ),
                ),
            ],
            options={
                "db_table": "wallet_transactions",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "-created_at"], name="wallet_tx_user_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("body", models.TextField()),
                ("type", models.CharField(max_length=50)),
                ("related_id", models.CharField(blank=True, max_length=64, null=True)),
                ("read", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "recipient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to="eventhub.useraccount",
                    ),
                ),
            ],
            options={
                "db_table": "notifications",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["recipient", "-created_at"], name="notif_recipient_created_idx"),
                ],
            },
        ),
    ]
