"""
Change notifications for connected dashboards.

After a successful write the view calls :func:`broadcast_change`; every
socket in the ``updates`` group receives a ``records.changed`` event and
refetches the resource it names.  Delivery is best effort: a broken
channel layer is logged and the write still succeeds.
"""
from __future__ import annotations

import logging
from typing import Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.utils import timezone

logger = logging.getLogger(__name__)

UPDATES_GROUP = 'updates'


def change_event(resource: str, action: str, object_id: Optional[int] = None) -> dict:
    return {
        'type': 'records.changed',
        'resource': resource,
        'action': action,
        'id': object_id,
        'ts': timezone.now().isoformat(),
    }


def broadcast_change(resource: str, action: str, object_id: Optional[int] = None) -> bool:
    """Tell the ``updates`` group that ``resource`` changed. Returns ``True`` if sent."""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return False
    try:
        async_to_sync(channel_layer.group_send)(UPDATES_GROUP, change_event(resource, action, object_id))
    except Exception:
        logger.warning('Broadcast of %s %s #%s failed', resource, action, object_id, exc_info=True)
        return False
    return True
