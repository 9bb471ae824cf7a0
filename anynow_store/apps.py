from django.apps import AppConfig

class AnynowStoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'anynow_store'

    def ready(self):
        import anynow_store.signals  # noqa: F401
