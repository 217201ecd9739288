# store/models/counter.py

import uuid

from django.db import models

from .store import Store


class Counter(models.Model):
    """
    A billing counter (till) inside a store.

    Checkout receives the counter explicitly; it is never read from session state.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="counters")
    name = models.CharField(max_length=100)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["store", "name"]
        constraints = [
            models.UniqueConstraint(fields=["store", "name"], name="uniq_counter_name_per_store"),
        ]

    def __str__(self):
        return f"{self.store.name} / {self.name}"
