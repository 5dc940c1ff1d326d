from unittest import mock

from django.test import TestCase
from rest_framework.test import APIClient

from accounts.models import User
from team.models import TEAM_LEAD
from .models import Project, ProjectMember


class ProjectApiTest(TestCase):
    """CRUD over projects scoped to what the user created or is on the team of."""

    def setUp(self):
        self.owner = User.objects.create_user(email='owner@example.com', full_name='Owner One', password='password123')
        self.member = User.objects.create_user(email='member@example.com', full_name='Member', password='password123')
        self.outsider = User.objects.create_user(email='out@example.com', full_name='Out', password='password123')

        self.own = Project.objects.create(title='Own', created_by=self.owner, status='completed')
        self.shared = Project.objects.create(title='Shared', created_by=self.outsider, status='in_progress')
        self.hidden = Project.objects.create(title='Hidden', created_by=self.outsider, status='aborted')
        ProjectMember.objects.create(project=self.shared, user=self.owner, role='Frontend Developer')
        ProjectMember.objects.create(project=self.own, user=self.member, role=TEAM_LEAD)

        self.client = APIClient()
        self.client.force_authenticate(user=self.owner)

    def test_requires_authentication(self):
        client = APIClient()
        resp = client.get('/api/v1/projects/')
        self.assertEqual(resp.status_code, 401)

    def test_list_only_visible_newest_first(self):
        resp = self.client.get('/api/v1/projects/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([p['title'] for p in resp.data], ['Shared', 'Own'])

    def test_create_sets_creator_and_normalizes_tech_stack(self):
        resp = self.client.post('/api/v1/projects/', {
            'title': 'New one',
            'tech_stack': 'React, , TypeScript ,React',
            'github_url': '',
        }, format='json')
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data['tech_stack'], ['React', 'TypeScript', 'React'])
        self.assertEqual(resp.data['status'], 'in_progress')
        self.assertIsNone(resp.data['github_url'])
        project = Project.objects.get(id=resp.data['id'])
        self.assertEqual(project.created_by, self.owner)

    def test_create_accepts_tech_stack_list(self):
        resp = self.client.post('/api/v1/projects/', {'title': 'Listed', 'tech_stack': [' Django ', '', 'DRF']}, format='json')
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data['tech_stack'], ['Django', 'DRF'])

    def test_blank_title_rejected(self):
        resp = self.client.post('/api/v1/projects/', {'title': '   '}, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('title', resp.data)

    def test_retrieve_hidden_is_not_found(self):
        resp = self.client.get(f'/api/v1/projects/{self.hidden.id}/')
        self.assertEqual(resp.status_code, 404)

    def test_retrieve_missing_is_not_found(self):
        resp = self.client.get('/api/v1/projects/00000000-0000-0000-0000-000000000000/')
        self.assertEqual(resp.status_code, 404)

    def test_member_can_update(self):
        resp = self.client.patch(f'/api/v1/projects/{self.shared.id}/', {'status': 'completed', 'tech_stack': 'Go'}, format='json')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data['status'], 'completed')
        self.shared.refresh_from_db()
        self.assertEqual(self.shared.status, 'completed')
        self.assertEqual(self.shared.tech_stack, ['Go'])

    def test_creator_can_update(self):
        resp = self.client.put(f'/api/v1/projects/{self.own.id}/', {'title': 'Renamed', 'status': 'aborted'}, format='json')
        self.assertEqual(resp.status_code, 200)
        self.own.refresh_from_db()
        self.assertEqual(self.own.title, 'Renamed')
        self.assertEqual(self.own.status, 'aborted')

    def test_zero_row_update_is_reported_as_permission_problem(self):
        # the membership disappears between the read and the write
        with mock.patch('project.models.Project.objects.visible_to') as visible_to:
            visible_to.side_effect = [
                Project.objects.filter(pk=self.shared.pk),
                Project.objects.none(),
            ]
            resp = self.client.patch(f'/api/v1/projects/{self.shared.id}/', {'status': 'aborted'}, format='json')
        self.assertEqual(resp.status_code, 403)
        self.assertIn('Only the creator or team members can update', str(resp.data['detail']))
        self.shared.refresh_from_db()
        self.assertEqual(self.shared.status, 'in_progress')

    def test_zero_row_update_retries_for_creator(self):
        with mock.patch('project.models.Project.objects.visible_to') as visible_to:
            visible_to.side_effect = [
                Project.objects.filter(pk=self.own.pk),
                Project.objects.none(),
            ]
            resp = self.client.patch(f'/api/v1/projects/{self.own.id}/', {'status': 'in_progress'}, format='json')
        self.assertEqual(resp.status_code, 200)
        self.own.refresh_from_db()
        self.assertEqual(self.own.status, 'in_progress')

    def test_only_creator_can_delete(self):
        resp = self.client.delete(f'/api/v1/projects/{self.shared.id}/')
        self.assertEqual(resp.status_code, 403)
        self.assertTrue(Project.objects.filter(id=self.shared.id).exists())

    def test_delete_cascades_memberships(self):
        resp = self.client.delete(f'/api/v1/projects/{self.own.id}/')
        self.assertEqual(resp.status_code, 204)
        self.assertFalse(Project.objects.filter(id=self.own.id).exists())
        self.assertFalse(ProjectMember.objects.filter(project_id=self.own.id).exists())

    def test_removing_membership_hides_shared_project(self):
        ProjectMember.objects.filter(project=self.shared, user=self.owner).delete()
        resp = self.client.get('/api/v1/projects/')
        self.assertEqual([p['title'] for p in resp.data], ['Own'])


class ProjectQuerySetTest(TestCase):
    def test_visible_to_matches_creator_and_members(self):
        owner = User.objects.create_user(email='a@example.com', full_name='A', password='password123')
        other = User.objects.create_user(email='b@example.com', full_name='B', password='password123')
        mine = Project.objects.create(title='Mine', created_by=owner)
        theirs = Project.objects.create(title='Theirs', created_by=other)
        joined = Project.objects.create(title='Joined', created_by=other)
        ProjectMember.objects.create(project=joined, user=owner, role='Other')

        visible = set(Project.objects.visible_to(owner))
        self.assertEqual(visible, {mine, joined})
        self.assertNotIn(theirs, visible)
        self.assertEqual(list(Project.objects.shared_with(owner)), [joined])
