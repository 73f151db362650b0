"""Abstract model base for persisted aggregates.

``BaseModel`` gives every table a UUIDv7 primary key (time-ordered, so
index inserts stay append-mostly) plus ``created_at`` / ``updated_at``.
Public identifiers such as ``Order.order_id`` are declared on the
concrete models; the UUID never leaves the service.
"""

from __future__ import annotations

from typing import Any

import uuid6
from django.db import models


class BaseModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid6.uuid7, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args: Any, **kwargs: Any) -> None:
        # auto_now fields are skipped when update_fields omits them.
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = [*update_fields, "updated_at"]
        super().save(*args, **kwargs)
