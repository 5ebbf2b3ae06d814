from django.apps import AppConfig


class UnitGroupsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "unit_groups"
    verbose_name = "Unit groups"
