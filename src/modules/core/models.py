"""Base abstract models shared by the catalog modules.

Provides:
- ``TimestampedModel``: ``created_at`` / ``updated_at`` bookkeeping.

Design decisions:
- Timestamps use ``default=timezone.now`` instead of ``auto_now`` so that
  domain operations can re-stamp ``updated_at`` themselves (``touch()``) and
  records rebuilt from plain dicts keep the timestamps they carry.
- ``save()`` guard ensures ``updated_at`` is included when ``update_fields``
  is specified.
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class TimestampedModel(models.Model):
    """Abstract base with creation / last-mutation timestamps."""

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        abstract = True

    def touch(self) -> None:
        """Re-stamp ``updated_at`` with the current time."""
        self.updated_at = timezone.now()

    def save(self, *args, **kwargs) -> None:
        """Refresh ``updated_at`` on every save, even with ``update_fields``."""
        if not self._state.adding:
            self.touch()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)
