from django.apps import AppConfig


class ApeKeysConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ape_keys"
    verbose_name = "Ape keys"
