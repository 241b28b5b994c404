import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models

from navigation.conf import nav_table_name


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("label", models.CharField(max_length=255, verbose_name="label")),
                ("uri", models.CharField(max_length=500, verbose_name="URI")),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("active", models.BooleanField(default=True)),
                ("fragment", models.CharField(blank=True, default="", max_length=255)),
                ("target", models.CharField(blank=True, default="", max_length=50)),
                ("rel", models.CharField(blank=True, default="", max_length=100)),
                ("css_class", models.CharField(blank=True, default="", max_length=255)),
                ("dom_id", models.CharField(blank=True, default="", max_length=255)),
                ("li_class", models.CharField(blank=True, default="", max_length=255)),
                ("li_id", models.CharField(blank=True, default="", max_length=255)),
                ("ul_class", models.CharField(blank=True, default="", max_length=255)),
                ("ul_id", models.CharField(blank=True, default="", max_length=255)),
                ("handler_class", models.CharField(blank=True, default="", help_text="Registry key of a class handler that supplies the children.", max_length=255)),
                ("handler_function", models.CharField(blank=True, default="", help_text="Registry key of a function handler that supplies the children.", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("parent", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="children", to="navigation.menuitem")),
            ],
            options={
                "verbose_name": "menu item",
                "verbose_name_plural": "menu items",
                "db_table": nav_table_name(),
                "ordering": ["parent_id", "sort_order", "id"],
                "indexes": [models.Index(fields=["parent", "active", "sort_order"], name="menuitem_level_idx")],
            },
        ),
        migrations.CreateModel(
            name="HistoricalMenuItem",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("label", models.CharField(max_length=255, verbose_name="label")),
                ("uri", models.CharField(max_length=500, verbose_name="URI")),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("active", models.BooleanField(default=True)),
                ("fragment", models.CharField(blank=True, default="", max_length=255)),
                ("target", models.CharField(blank=True, default="", max_length=50)),
                ("rel", models.CharField(blank=True, default="", max_length=100)),
                ("css_class", models.CharField(blank=True, default="", max_length=255)),
                ("dom_id", models.CharField(blank=True, default="", max_length=255)),
                ("li_class", models.CharField(blank=True, default="", max_length=255)),
                ("li_id", models.CharField(blank=True, default="", max_length=255)),
                ("ul_class", models.CharField(blank=True, default="", max_length=255)),
                ("ul_id", models.CharField(blank=True, default="", max_length=255)),
                ("handler_class", models.CharField(blank=True, default="", help_text="Registry key of a class handler that supplies the children.", max_length=255)),
                ("handler_function", models.CharField(blank=True, default="", help_text="Registry key of a function handler that supplies the children.", max_length=255)),
                ("created_at", models.DateTimeField(blank=True, editable=False)),
                ("updated_at", models.DateTimeField(blank=True, editable=False)),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                ("history_type", models.CharField(choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")], max_length=1)),
                ("history_user", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
                ("parent", models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name="+", to="navigation.menuitem")),
            ],
            options={
                "verbose_name": "historical menu item",
                "verbose_name_plural": "historical menu items",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
