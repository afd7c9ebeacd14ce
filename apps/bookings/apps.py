from django.apps import AppConfig


class BookingsConfig(AppConfig):
    name = "apps.bookings"
    label = "bookings"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        from apps.bookings.application.event_handlers import register_event_handlers

        register_event_handlers()
