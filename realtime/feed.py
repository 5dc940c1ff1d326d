"""
Row-level change notifications.

Every write to a watched table is announced to the group for the filter a
client would subscribe with, e.g. ``project_members`` rows are announced on
``project_id=eq.<project id>``. The payload only says *what* changed; clients
refetch the collection and replace their state.
"""
import logging
import uuid

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction

logger = logging.getLogger(__name__)

INSERT = 'INSERT'
UPDATE = 'UPDATE'
DELETE = 'DELETE'

# table -> column a subscription may filter on
FEED_TABLES = {
    'projects': 'id',
    'hackathons': 'id',
    'project_members': 'project_id',
    'hackathon_members': 'hackathon_id',
    'hackathon_projects': 'hackathon_id',
}


class FeedError(ValueError):
    pass


def change_filter(column, value):
    return f"{column}=eq.{value}"


def group_name(table, column, value):
    return f"changes.{table}.{column}.{value}"


def parse_filter(table, filter_expr):
    """Return ``(column, value)`` for a ``column=eq.value`` filter on a watched table."""
    if table not in FEED_TABLES:
        raise FeedError(f"Unknown table '{table}'.")
    if not isinstance(filter_expr, str) or '=eq.' not in filter_expr:
        raise FeedError("Filter must look like 'column=eq.value'.")

    column, value = filter_expr.split('=eq.', 1)
    column = column.strip()
    if column != FEED_TABLES[table]:
        raise FeedError(f"Table '{table}' can only be filtered by '{FEED_TABLES[table]}'.")
    try:
        value = str(uuid.UUID(value.strip()))
    except ValueError:
        raise FeedError(f"'{value}' is not a valid id.")
    return column, value


def send_change(table, column, value, event_type):
    channel_layer = get_channel_layer()
    if not channel_layer:
        return
    try:
        async_to_sync(channel_layer.group_send)(group_name(table, column, value), {
            'type': 'store.changed',
            'payload': {
                'table': table,
                'filter': change_filter(column, value),
                'type': event_type,
            }
        })
    except Exception as e:
        # the write already committed; a lost notification must not fail it
        logger.error(f"Failed to broadcast {event_type} on {table} ({column}={value}): {e}")


def broadcast_change(table, column, value, event_type):
    """Announce a change once the surrounding transaction commits."""
    value = str(value)
    transaction.on_commit(lambda: send_change(table, column, value, event_type))


def broadcast_instance(instance, event_type):
    table = instance._meta.db_table
    column = FEED_TABLES.get(table)
    if column is None:
        return
    broadcast_change(table, column, getattr(instance, column), event_type)
