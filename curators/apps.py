from django.apps import AppConfig


class CuratorsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "curators"
