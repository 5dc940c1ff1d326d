from types import SimpleNamespace
from unittest import mock

from django.db import IntegrityError
from django.test import SimpleTestCase, TestCase
from rest_framework import serializers
from rest_framework.test import APIClient

from accounts.models import User
from project.models import Project, ProjectMember
from .models import TEAM_LEAD
from .roster import MembershipError, MembershipManager, RosterEntry, project_roster
from .serializers import AddMemberSerializer, UpdateMemberRoleSerializer
from .visibility import is_visible_to, visible_entities


def entry(member_id, user_id, role):
    return RosterEntry(id=member_id, user_id=user_id, role=role)


class MembershipManagerTest(SimpleTestCase):
    def setUp(self):
        self.manager = MembershipManager('project')
        self.roster = [
            entry('m1', 'u1', TEAM_LEAD),
            entry('m2', 'u2', 'Designer'),
        ]

    def test_second_team_lead_is_rejected(self):
        with self.assertRaises(MembershipError) as ctx:
            self.manager.add_member(self.roster, 'u3', TEAM_LEAD)
        self.assertEqual(ctx.exception.code, 'duplicate_lead')
        self.assertIn('A project can only have one Team Lead', ctx.exception.message)
        self.assertEqual(len(self.roster), 2)

    def test_existing_user_is_rejected_for_any_role(self):
        for role in ['Frontend Developer', 'Backend Developer', 'Designer', 'Other']:
            with self.assertRaises(MembershipError) as ctx:
                self.manager.add_member(self.roster, 'u2', role)
            self.assertEqual(ctx.exception.code, 'duplicate_member')
        self.assertEqual([m.user_id for m in self.roster], ['u1', 'u2'])

    def test_add_appends_and_keeps_order(self):
        result = self.manager.add_member(self.roster, 'u3', 'Backend Developer')
        self.assertEqual([m.user_id for m in result], ['u1', 'u2', 'u3'])
        self.assertEqual(result[-1].role, 'Backend Developer')
        self.assertEqual(len(self.roster), 2)

    def test_first_team_lead_is_accepted(self):
        roster = [entry('m2', 'u2', 'Designer')]
        result = self.manager.add_member(roster, 'u3', TEAM_LEAD)
        self.assertEqual(result[-1].role, TEAM_LEAD)

    def test_unknown_role_is_rejected(self):
        with self.assertRaises(MembershipError) as ctx:
            self.manager.add_member(self.roster, 'u3', 'Astronaut')
        self.assertEqual(ctx.exception.code, 'invalid_role')

    def test_promoting_second_member_to_lead_is_rejected(self):
        with self.assertRaises(MembershipError):
            self.manager.update_member_role(self.roster, 'm2', TEAM_LEAD)
        self.assertEqual(self.roster[1].role, 'Designer')

    def test_lead_can_keep_lead_role(self):
        result = self.manager.update_member_role(self.roster, 'm1', TEAM_LEAD)
        self.assertEqual(result[0].role, TEAM_LEAD)

    def test_role_update_replaces_only_target(self):
        result = self.manager.update_member_role(self.roster, 'm2', 'Other')
        self.assertEqual([(m.id, m.role) for m in result], [('m1', TEAM_LEAD), ('m2', 'Other')])
        self.assertEqual(self.roster[1].role, 'Designer')

    def test_remove_keeps_order_of_the_rest(self):
        roster = self.roster + [entry('m3', 'u3', 'Other')]
        result = self.manager.remove_member(roster, 'm2')
        self.assertEqual([m.id for m in result], ['m1', 'm3'])

    def test_remove_unknown_member_is_noop(self):
        result = self.manager.remove_member(self.roster, 'missing')
        self.assertEqual(result, self.roster)

    def test_hackathon_messages_name_the_entity(self):
        manager = MembershipManager('hackathon')
        with self.assertRaises(MembershipError) as ctx:
            manager.check_add(self.roster, 'u9', TEAM_LEAD)
        self.assertIn('A hackathon can only have one Team Lead', ctx.exception.message)


def entity(entity_id, created_by):
    return SimpleNamespace(id=entity_id, created_by_id=created_by)


def membership(entity_id, user_id):
    return SimpleNamespace(project_id=entity_id, user_id=user_id)


class VisibilityTest(SimpleTestCase):
    def setUp(self):
        self.entities = [entity('p1', 'u1'), entity('p2', 'u2'), entity('p3', 'u3'), entity('p4', 'u1')]
        self.memberships = [membership('p3', 'u1'), membership('p2', 'u3')]

    def test_creator_or_member(self):
        result = visible_entities(self.entities, self.memberships, 'u1', 'project_id')
        self.assertEqual([e.id for e in result], ['p1', 'p3', 'p4'])

    def test_empty_memberships_means_creator_only(self):
        result = visible_entities(self.entities, [], 'u1', 'project_id')
        self.assertEqual([e.id for e in result], ['p1', 'p4'])
        self.assertEqual(visible_entities(self.entities, None, 'u2', 'project_id'), [self.entities[1]])

    def test_filter_is_idempotent(self):
        once = visible_entities(self.entities, self.memberships, 'u1', 'project_id')
        twice = visible_entities(once, self.memberships, 'u1', 'project_id')
        self.assertEqual(once, twice)

    def test_removing_membership_hides_only_shared_entities(self):
        memberships = self.memberships + [membership('p1', 'u1')]
        before = visible_entities(self.entities, memberships, 'u1', 'project_id')
        remaining = [m for m in memberships if not (m.project_id == 'p3' and m.user_id == 'u1')]
        after = visible_entities(self.entities, remaining, 'u1', 'project_id')
        self.assertEqual([e.id for e in before], ['p1', 'p3', 'p4'])
        self.assertEqual([e.id for e in after], ['p1', 'p4'])

    def test_is_visible_to(self):
        self.assertTrue(is_visible_to(self.entities[2], self.memberships, 'u1', 'project_id'))
        self.assertFalse(is_visible_to(self.entities[0], self.memberships, 'u3', 'project_id'))


class ProjectRosterApiTest(TestCase):
    """Roster endpoints validate before writing and answer with a fresh roster."""

    def setUp(self):
        self.owner = User.objects.create_user(email='owner@example.com', full_name='Owner One', password='password123')
        self.alice = User.objects.create_user(email='alice@example.com', full_name='Alice', password='password123')
        self.bob = User.objects.create_user(email='bob@example.com', full_name='Bob', password='password123')
        self.outsider = User.objects.create_user(email='out@example.com', full_name='Out', password='password123')
        self.project = Project.objects.create(title='Tracker', created_by=self.owner)
        self.lead = ProjectMember.objects.create(project=self.project, user=self.alice, role=TEAM_LEAD)

        self.client = APIClient()
        self.client.force_authenticate(user=self.owner)
        self.url = f'/api/v1/projects/{self.project.id}/members/'

    def test_list_members_with_profiles(self):
        resp = self.client.get(self.url)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.data), 1)
        self.assertEqual(resp.data[0]['role'], TEAM_LEAD)
        self.assertTrue(resp.data[0]['is_lead'])
        self.assertEqual(resp.data[0]['profile']['email'], 'alice@example.com')

    def test_add_member(self):
        resp = self.client.post(self.url, {'user_id': str(self.bob.id), 'role': 'Designer'}, format='json')
        self.assertEqual(resp.status_code, 201)
        self.assertEqual([m['profile']['email'] for m in resp.data], ['alice@example.com', 'bob@example.com'])

    def test_add_second_lead_rejected_without_write(self):
        resp = self.client.post(self.url, {'user_id': str(self.bob.id), 'role': TEAM_LEAD}, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('only have one Team Lead', str(resp.data['non_field_errors'][0]))
        self.assertEqual(ProjectMember.objects.filter(project=self.project).count(), 1)

    def test_add_duplicate_member_rejected(self):
        resp = self.client.post(self.url, {'user_id': str(self.alice.id), 'role': 'Other'}, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(str(resp.data['non_field_errors'][0]), 'This user is already a team member.')

    def test_add_unknown_user_rejected(self):
        resp = self.client.post(self.url, {'user_id': '00000000-0000-0000-0000-000000000000', 'role': 'Other'}, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('user_id', resp.data)

    def test_add_invalid_role_rejected(self):
        resp = self.client.post(self.url, {'user_id': str(self.bob.id), 'role': 'Astronaut'}, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('role', resp.data)

    def test_promote_second_lead_rejected(self):
        member = ProjectMember.objects.create(project=self.project, user=self.bob, role='Designer')
        resp = self.client.patch(f'{self.url}{member.id}/', {'role': TEAM_LEAD}, format='json')
        self.assertEqual(resp.status_code, 400)
        member.refresh_from_db()
        self.assertEqual(member.role, 'Designer')

    def test_change_role(self):
        resp = self.client.patch(f'{self.url}{self.lead.id}/', {'role': 'Backend Developer'}, format='json')
        self.assertEqual(resp.status_code, 200)
        self.lead.refresh_from_db()
        self.assertEqual(self.lead.role, 'Backend Developer')
        self.assertFalse(resp.data[0]['is_lead'])

    def test_remove_member(self):
        resp = self.client.delete(f'{self.url}{self.lead.id}/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data, [])
        self.assertFalse(ProjectMember.objects.filter(id=self.lead.id).exists())

    def test_remove_unknown_member_is_not_found(self):
        resp = self.client.delete(f'{self.url}00000000-0000-0000-0000-000000000000/')
        self.assertEqual(resp.status_code, 404)
        resp = self.client.delete(f'{self.url}not-a-uuid/')
        self.assertEqual(resp.status_code, 404)

    def test_member_can_manage_roster(self):
        self.client.force_authenticate(user=self.alice)
        resp = self.client.post(self.url, {'user_id': str(self.bob.id), 'role': 'Other'}, format='json')
        self.assertEqual(resp.status_code, 201)

    def test_outsider_cannot_see_roster(self):
        self.client.force_authenticate(user=self.outsider)
        self.assertEqual(self.client.get(self.url).status_code, 404)
        resp = self.client.post(self.url, {'user_id': str(self.bob.id), 'role': 'Other'}, format='json')
        self.assertEqual(resp.status_code, 404)

    def test_roster_manager_used_by_view_is_project_scoped(self):
        self.assertEqual(project_roster.entity_type, 'project')


class RosterConflictTest(TestCase):
    """A concurrent write that slips past validation is explained like a validation failure."""

    def setUp(self):
        self.owner = User.objects.create_user(email='owner@example.com', full_name='Owner One', password='password123')
        self.bob = User.objects.create_user(email='bob@example.com', full_name='Bob', password='password123')
        self.carol = User.objects.create_user(email='carol@example.com', full_name='Carol', password='password123')
        self.project = Project.objects.create(title='Tracker', created_by=self.owner)

    def context(self):
        roster = list(ProjectMember.objects.filter(project=self.project).order_by('created_at'))
        return {
            'entity': self.project,
            'roster': roster,
            'manager': project_roster,
            'member_model': ProjectMember,
        }

    def test_concurrent_add_reported_as_duplicate_member(self):
        serializer = AddMemberSerializer(data={'user_id': str(self.bob.id), 'role': 'Designer'}, context=self.context())
        self.assertTrue(serializer.is_valid(), serializer.errors)

        # someone else adds the same user after our roster was read
        ProjectMember.objects.create(project=self.project, user=self.bob, role='Other')

        with self.assertRaises(serializers.ValidationError) as ctx:
            serializer.save()
        self.assertEqual(ctx.exception.get_codes(), ['duplicate_member'])
        self.assertEqual(ProjectMember.objects.filter(project=self.project, user=self.bob).get().role, 'Other')

    def test_concurrent_promotion_reported_as_duplicate_lead(self):
        bob = ProjectMember.objects.create(project=self.project, user=self.bob, role='Designer')
        carol = ProjectMember.objects.create(project=self.project, user=self.carol, role='Designer')

        serializer = UpdateMemberRoleSerializer(bob, data={'role': TEAM_LEAD}, context=self.context())
        self.assertTrue(serializer.is_valid(), serializer.errors)

        ProjectMember.objects.filter(pk=carol.pk).update(role=TEAM_LEAD)

        with self.assertRaises(serializers.ValidationError) as ctx:
            serializer.save()
        self.assertEqual(ctx.exception.get_codes(), ['duplicate_lead'])
        self.assertEqual(ProjectMember.objects.get(pk=bob.pk).role, 'Designer')

    def test_unexplained_conflict_is_a_409(self):
        client = APIClient()
        client.force_authenticate(user=self.owner)
        with mock.patch.object(ProjectMember.objects, 'create', side_effect=IntegrityError('UNIQUE constraint failed: project_members.id')):
            resp = client.post(
                f'/api/v1/projects/{self.project.id}/members/',
                {'user_id': str(self.bob.id), 'role': 'Designer'},
                format='json'
            )
        self.assertEqual(resp.status_code, 409)
        self.assertIn('UNIQUE constraint failed', resp.data['error'])
        self.assertFalse(ProjectMember.objects.filter(project=self.project).exists())
