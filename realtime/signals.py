from django.apps import apps
from django.db.models.signals import post_delete, post_save

from .feed import FEED_TABLES, INSERT, UPDATE, DELETE, broadcast_instance


def announce_save(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    broadcast_instance(instance, INSERT if created else UPDATE)


def announce_delete(sender, instance, **kwargs):
    broadcast_instance(instance, DELETE)


def watched_models():
    return [model for model in apps.get_models() if model._meta.db_table in FEED_TABLES]


def connect_feed_signals():
    for model in watched_models():
        post_save.connect(announce_save, sender=model, dispatch_uid=f'feed_save_{model._meta.label}')
        post_delete.connect(announce_delete, sender=model, dispatch_uid=f'feed_delete_{model._meta.label}')
