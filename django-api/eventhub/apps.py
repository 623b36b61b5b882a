from django.apps import AppConfig


class EventhubConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "eventhub"

    def ready(self) -> None:
        from eventhub import signals  # noqa: F401
