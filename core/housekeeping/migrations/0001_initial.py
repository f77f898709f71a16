import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="TaskCatalogEntry",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("area", models.CharField(max_length=120)),
                ("description", models.TextField(blank=True, default="")),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "ops_hk_task_catalog",
                "ordering": ["name", "id"],
            },
        ),
        migrations.CreateModel(
            name="TaskInstance",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("work_date", models.DateField()),
                ("planned_start", models.DateTimeField()),
                ("planned_end", models.DateTimeField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("planned", "Planned"),
                            ("completed", "Completed"),
                            ("skipped", "Skipped"),
                        ],
                        default="planned",
                        max_length=20,
                    ),
                ),
                (
                    "task",
                    models.ForeignKey(
                        db_column="task_id",
                        db_constraint=False,
                        on_delete=models.deletion.DO_NOTHING,
                        related_name="instances",
                        to="core_housekeeping.taskcatalogentry",
                    ),
                ),
            ],
            options={
                "db_table": "ops_hk_task_instances",
                "ordering": ["work_date", "planned_start", "id"],
                "indexes": [
                    models.Index(
                        fields=["work_date", "planned_start", "id"],
                        name="idx_hk_inst_date_start",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(planned_start__lte=models.F("planned_end")),
                        name="ck_hk_inst_window_ordered",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="TaskCompletion",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("completed", models.BooleanField()),
                (
                    "completion_status",
                    models.CharField(
                        choices=[("on_time", "On time"), ("skipped", "Skipped")],
                        max_length=20,
                    ),
                ),
                ("completed_at", models.DateTimeField()),
                ("remarks", models.TextField(blank=True, null=True)),
                ("supervisor", models.CharField(default="manager", max_length=255)),
                (
                    "instance",
                    models.OneToOneField(
                        db_column="instance_id",
                        on_delete=models.deletion.CASCADE,
                        related_name="completion",
                        to="core_housekeeping.taskinstance",
                    ),
                ),
            ],
            options={
                "db_table": "ops_hk_task_completions",
                "ordering": ["instance_id"],
            },
        ),
    ]
