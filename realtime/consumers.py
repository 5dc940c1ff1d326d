import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from .feed import FeedError, change_filter, group_name, parse_filter

logger = logging.getLogger(__name__)

# table -> (app label, model) of the entity a subscription is scoped to
ENTITY_FOR_TABLE = {
    'projects': ('project', 'Project'),
    'project_members': ('project', 'Project'),
    'hackathons': ('hackathon', 'Hackathon'),
    'hackathon_members': ('hackathon', 'Hackathon'),
    'hackathon_projects': ('hackathon', 'Hackathon'),
}


class ChangeFeedConsumer(AsyncWebsocketConsumer):
    """
    Lets a client watch tables for changes. Messages:

        {"action": "subscribe", "table": "project_members", "filter": "project_id=eq.<id>"}
        {"action": "unsubscribe", "table": ..., "filter": ...}

    and pushes ``{"event": "changed", "data": {"table", "filter", "type"}}``.
    """

    async def connect(self):
        user = self.scope.get('user')
        if not user or not user.is_authenticated:
            await self.close(code=4401)
            return

        self.subscriptions = set()
        await self.accept()

    async def disconnect(self, close_code):
        for name in getattr(self, 'subscriptions', set()):
            await self.channel_layer.group_discard(name, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        if not text_data:
            return

        try:
            data = json.loads(text_data)
        except json.JSONDecodeError:
            await self._send_error('Invalid JSON')
            return
        if not isinstance(data, dict):
            await self._send_error('Invalid message')
            return

        action = data.get('action')
        table = data.get('table')

        try:
            column, value = parse_filter(table, data.get('filter'))
        except FeedError as e:
            await self._send_error(str(e))
            return

        name = group_name(table, column, value)
        subscription = {'table': table, 'filter': change_filter(column, value)}

        if action == 'subscribe':
            if not await self._can_view(table, value):
                await self._send_error('Not found or not visible to you.')
                return
            await self.channel_layer.group_add(name, self.channel_name)
            self.subscriptions.add(name)
            await self._send_event('subscribed', subscription)
        elif action == 'unsubscribe':
            if name in self.subscriptions:
                await self.channel_layer.group_discard(name, self.channel_name)
                self.subscriptions.discard(name)
            await self._send_event('unsubscribed', subscription)
        else:
            await self._send_error('Unknown action')

    async def store_changed(self, event):
        payload = event['payload']
        column, value = parse_filter(payload['table'], payload['filter'])
        if not await self._still_visible(payload['table'], value):
            # membership was revoked since subscribing
            name = group_name(payload['table'], column, value)
            await self.channel_layer.group_discard(name, self.channel_name)
            self.subscriptions.discard(name)
            await self._send_event('unsubscribed', {'table': payload['table'], 'filter': payload['filter']})
            return
        await self._send_event('changed', payload)

    async def _send_event(self, name, data):
        await self.send(text_data=json.dumps({'event': name, 'data': data}))

    async def _send_error(self, message):
        await self._send_event('error', {'message': message})

    @database_sync_to_async
    def _can_view(self, table, entity_id):
        from django.apps import apps

        model = apps.get_model(*ENTITY_FOR_TABLE[table])
        user = self.scope['user']
        return model.objects.visible_to(user).filter(pk=entity_id).exists()

    @database_sync_to_async
    def _still_visible(self, table, entity_id):
        """Visible to the user, or deleted altogether so the last event can go out."""
        from django.apps import apps

        model = apps.get_model(*ENTITY_FOR_TABLE[table])
        user = self.scope['user']
        if model.objects.visible_to(user).filter(pk=entity_id).exists():
            return True
        return not model.objects.filter(pk=entity_id).exists()
