from django.apps import AppConfig


class NavigationAppConfig(AppConfig):
    name = "navigation"
    verbose_name = "Navigation"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        from . import signals  # noqa: F401
