from django.db import models


class StoredValue(models.Model):
    """One key of the shared key-value store; `value` holds raw JSON text."""
    key = models.CharField(max_length=200, unique=True, db_index=True)
    value = models.TextField(blank=True, default="")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def __str__(self):
        return self.key
