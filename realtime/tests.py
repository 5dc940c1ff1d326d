import uuid

from asgiref.sync import async_to_sync
from channels.db import database_sync_to_async
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.test import SimpleTestCase, TestCase

from accounts.models import User
from project.models import Project, ProjectMember
from team.models import TEAM_LEAD
from .auth import token_from_scope
from .consumers import ChangeFeedConsumer
from .feed import DELETE, INSERT, UPDATE, FeedError, group_name, parse_filter


class ParseFilterTest(SimpleTestCase):
    def test_valid_filter(self):
        value = uuid.uuid4()
        self.assertEqual(
            parse_filter('project_members', f'project_id=eq.{value}'),
            ('project_id', str(value))
        )

    def test_unknown_table(self):
        with self.assertRaises(FeedError):
            parse_filter('users', f'id=eq.{uuid.uuid4()}')

    def test_wrong_column(self):
        with self.assertRaises(FeedError):
            parse_filter('project_members', f'user_id=eq.{uuid.uuid4()}')

    def test_malformed_filter(self):
        for expr in [None, '', 5, ['project_id=eq.x'], 'project_id=5', 'project_id=eq.not-an-id']:
            with self.assertRaises(FeedError):
                parse_filter('project_members', expr)


class TokenFromScopeTest(SimpleTestCase):
    def test_query_string(self):
        self.assertEqual(token_from_scope({'query_string': b'token=abc'}), 'abc')

    def test_authorization_header(self):
        scope = {'query_string': b'', 'headers': [(b'authorization', b'Bearer xyz')]}
        self.assertEqual(token_from_scope(scope), 'xyz')

    def test_missing(self):
        self.assertIsNone(token_from_scope({'headers': [(b'authorization', b'Basic foo')]}))


class ChangeBroadcastTest(TestCase):
    """Writes are announced on the subscription group after commit."""

    def setUp(self):
        self.layer = get_channel_layer()
        async_to_sync(self.layer.flush)()
        self.owner = User.objects.create_user(email='owner@example.com', full_name='Owner', password='password123')
        self.member = User.objects.create_user(email='member@example.com', full_name='Member', password='password123')
        self.project = Project.objects.create(title='Tracker', created_by=self.owner)

    def listen(self, table, column, value):
        channel = async_to_sync(self.layer.new_channel)()
        async_to_sync(self.layer.group_add)(group_name(table, column, str(value)), channel)
        return channel

    def receive(self, channel):
        return async_to_sync(self.layer.receive)(channel)

    def test_member_insert_and_delete(self):
        channel = self.listen('project_members', 'project_id', self.project.id)

        with self.captureOnCommitCallbacks(execute=True):
            member = ProjectMember.objects.create(project=self.project, user=self.member, role=TEAM_LEAD)
        message = self.receive(channel)
        self.assertEqual(message['type'], 'store.changed')
        self.assertEqual(message['payload'], {
            'table': 'project_members',
            'filter': f'project_id=eq.{self.project.id}',
            'type': INSERT,
        })

        with self.captureOnCommitCallbacks(execute=True):
            member.delete()
        self.assertEqual(self.receive(channel)['payload']['type'], DELETE)

    def test_nothing_sent_before_commit(self):
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            ProjectMember.objects.create(project=self.project, user=self.member, role='Other')
        self.assertEqual(len(callbacks), 1)

    def test_entity_update_via_api_is_announced(self):
        from rest_framework.test import APIClient

        channel = self.listen('projects', 'id', self.project.id)
        client = APIClient()
        client.force_authenticate(user=self.owner)

        with self.captureOnCommitCallbacks(execute=True):
            resp = client.patch(f'/api/v1/projects/{self.project.id}/', {'status': 'completed'}, format='json')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.receive(channel)['payload']['type'], UPDATE)


class ChangeFeedConsumerTest(TestCase):
    def setUp(self):
        async_to_sync(get_channel_layer().flush)()
        self.owner = User.objects.create_user(email='owner@example.com', full_name='Owner', password='password123')
        self.outsider = User.objects.create_user(email='out@example.com', full_name='Out', password='password123')
        self.project = Project.objects.create(title='Tracker', created_by=self.owner)

    def communicator(self, user=None):
        communicator = WebsocketCommunicator(ChangeFeedConsumer.as_asgi(), '/ws/changes/')
        if user is not None:
            communicator.scope['user'] = user
        return communicator

    async def test_anonymous_is_rejected(self):
        communicator = self.communicator()
        connected, code = await communicator.connect()
        self.assertFalse(connected)
        self.assertEqual(code, 4401)

    async def test_subscribe_and_receive_change(self):
        communicator = self.communicator(self.owner)
        connected, _ = await communicator.connect()
        self.assertTrue(connected)

        subscription = {'table': 'project_members', 'filter': f'project_id=eq.{self.project.id}'}
        await communicator.send_json_to({'action': 'subscribe', **subscription})
        response = await communicator.receive_json_from()
        self.assertEqual(response, {'event': 'subscribed', 'data': subscription})

        payload = {**subscription, 'type': INSERT}
        await get_channel_layer().group_send(
            group_name('project_members', 'project_id', str(self.project.id)),
            {'type': 'store.changed', 'payload': payload}
        )
        response = await communicator.receive_json_from()
        self.assertEqual(response, {'event': 'changed', 'data': payload})

        await communicator.send_json_to({'action': 'unsubscribe', **subscription})
        response = await communicator.receive_json_from()
        self.assertEqual(response['event'], 'unsubscribed')
        await communicator.disconnect()

    async def test_cannot_subscribe_to_invisible_entity(self):
        communicator = self.communicator(self.outsider)
        await communicator.connect()
        await communicator.send_json_to({
            'action': 'subscribe', 'table': 'projects', 'filter': f'id=eq.{self.project.id}'
        })
        response = await communicator.receive_json_from()
        self.assertEqual(response['event'], 'error')
        await communicator.disconnect()

    async def test_bad_messages_get_errors(self):
        communicator = self.communicator(self.owner)
        await communicator.connect()

        await communicator.send_to(text_data='not json')
        self.assertEqual(await communicator.receive_json_from(), {'event': 'error', 'data': {'message': 'Invalid JSON'}})

        await communicator.send_json_to({'action': 'subscribe', 'table': 'users', 'filter': 'id=eq.1'})
        self.assertEqual((await communicator.receive_json_from())['event'], 'error')

        await communicator.send_to(text_data='[1, 2]')
        self.assertEqual(await communicator.receive_json_from(), {'event': 'error', 'data': {'message': 'Invalid message'}})

        await communicator.send_json_to({'action': 'subscribe', 'table': 'projects', 'filter': 5})
        self.assertEqual((await communicator.receive_json_from())['event'], 'error')

        # connection is still usable after the bad messages
        subscription = {'table': 'projects', 'filter': f'id=eq.{self.project.id}'}
        await communicator.send_json_to({'action': 'subscribe', **subscription})
        self.assertEqual(await communicator.receive_json_from(), {'event': 'subscribed', 'data': subscription})
        await communicator.disconnect()

    async def test_removed_member_stops_receiving_changes(self):
        member = await database_sync_to_async(ProjectMember.objects.create)(
            project=self.project, user=self.outsider, role='Designer'
        )
        communicator = self.communicator(self.outsider)
        await communicator.connect()

        subscription = {'table': 'project_members', 'filter': f'project_id=eq.{self.project.id}'}
        await communicator.send_json_to({'action': 'subscribe', **subscription})
        self.assertEqual((await communicator.receive_json_from())['event'], 'subscribed')

        await database_sync_to_async(member.delete)()
        name = group_name('project_members', 'project_id', str(self.project.id))
        await get_channel_layer().group_send(name, {'type': 'store.changed', 'payload': {**subscription, 'type': DELETE}})

        self.assertEqual(await communicator.receive_json_from(), {'event': 'unsubscribed', 'data': subscription})

        await get_channel_layer().group_send(name, {'type': 'store.changed', 'payload': {**subscription, 'type': INSERT}})
        self.assertTrue(await communicator.receive_nothing())
        await communicator.disconnect()

    async def test_deleted_entity_event_still_delivered(self):
        communicator = self.communicator(self.owner)
        await communicator.connect()

        subscription = {'table': 'projects', 'filter': f'id=eq.{self.project.id}'}
        await communicator.send_json_to({'action': 'subscribe', **subscription})
        await communicator.receive_json_from()

        await database_sync_to_async(self.project.delete)()
        payload = {**subscription, 'type': DELETE}
        await get_channel_layer().group_send(
            group_name('projects', 'id', str(self.project.id)),
            {'type': 'store.changed', 'payload': payload}
        )
        self.assertEqual(await communicator.receive_json_from(), {'event': 'changed', 'data': payload})
        await communicator.disconnect()
