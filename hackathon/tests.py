import datetime

from django.test import TestCase
from rest_framework.test import APIClient

from accounts.models import User
from project.models import Project
from team.models import TEAM_LEAD
from .models import Hackathon, HackathonMember, HackathonProject


class HackathonApiTest(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(email='owner@example.com', full_name='Owner One', password='password123')
        self.member = User.objects.create_user(email='member@example.com', full_name='Member', password='password123')
        self.outsider = User.objects.create_user(email='out@example.com', full_name='Out', password='password123')

        self.early = Hackathon.objects.create(
            title='Early', created_by=self.owner, start_date=datetime.date(2024, 1, 10), status='completed'
        )
        self.late = Hackathon.objects.create(
            title='Late', created_by=self.outsider, start_date=datetime.date(2024, 6, 1), status='ongoing'
        )
        self.undated = Hackathon.objects.create(title='Undated', created_by=self.owner)
        self.hidden = Hackathon.objects.create(title='Hidden', created_by=self.outsider)
        HackathonMember.objects.create(hackathon=self.late, user=self.owner, role=TEAM_LEAD)

        self.client = APIClient()
        self.client.force_authenticate(user=self.owner)

    def test_list_visible_latest_start_first(self):
        resp = self.client.get('/api/v1/hackathons/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([h['title'] for h in resp.data], ['Late', 'Early', 'Undated'])

    def test_create_with_dates(self):
        resp = self.client.post('/api/v1/hackathons/', {
            'title': 'Spring Jam',
            'start_date': '2025-03-01',
            'end_date': '',
            'tech_stack': 'Python,  Django',
        }, format='json')
        self.assertEqual(resp.status_code, 201, resp.data)
        self.assertEqual(resp.data['status'], 'upcoming')
        self.assertEqual(resp.data['start_date'], '2025-03-01')
        self.assertIsNone(resp.data['end_date'])
        self.assertEqual(resp.data['tech_stack'], ['Python', 'Django'])

    def test_invalid_status_rejected(self):
        resp = self.client.post('/api/v1/hackathons/', {'title': 'Bad', 'status': 'in_progress'}, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('status', resp.data)

    def test_member_can_update_but_not_delete(self):
        resp = self.client.patch(f'/api/v1/hackathons/{self.late.id}/', {'status': 'completed'}, format='json')
        self.assertEqual(resp.status_code, 200)
        resp = self.client.delete(f'/api/v1/hackathons/{self.late.id}/')
        self.assertEqual(resp.status_code, 403)

    def test_hidden_hackathon_not_found(self):
        resp = self.client.patch(f'/api/v1/hackathons/{self.hidden.id}/', {'status': 'completed'}, format='json')
        self.assertEqual(resp.status_code, 404)

    def test_second_team_lead_rejected(self):
        url = f'/api/v1/hackathons/{self.late.id}/members/'
        resp = self.client.post(url, {'user_id': str(self.member.id), 'role': TEAM_LEAD}, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('A hackathon can only have one Team Lead', str(resp.data['non_field_errors'][0]))
        self.assertEqual(HackathonMember.objects.filter(hackathon=self.late).count(), 1)

    def test_add_member_default_role(self):
        url = f'/api/v1/hackathons/{self.early.id}/members/'
        resp = self.client.post(url, {'user_id': str(self.member.id)}, format='json')
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data[0]['role'], 'Frontend Developer')


class HackathonProjectLinkTest(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(email='owner@example.com', full_name='Owner One', password='password123')
        self.other = User.objects.create_user(email='other@example.com', full_name='Other', password='password123')
        self.hackathon = Hackathon.objects.create(title='Jam', created_by=self.owner)
        self.project = Project.objects.create(title='Entry', created_by=self.owner)
        self.foreign_project = Project.objects.create(title='Not mine', created_by=self.other)

        self.client = APIClient()
        self.client.force_authenticate(user=self.owner)
        self.url = f'/api/v1/hackathons/{self.hackathon.id}/projects/'

    def test_link_list_and_unlink(self):
        resp = self.client.post(self.url, {'project_id': str(self.project.id)}, format='json')
        self.assertEqual(resp.status_code, 201)
        self.assertEqual([link['project']['title'] for link in resp.data], ['Entry'])

        resp = self.client.get(self.url)
        self.assertEqual(len(resp.data), 1)

        resp = self.client.delete(f'{self.url}{self.project.id}/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data, [])

    def test_duplicate_link_rejected(self):
        HackathonProject.objects.create(hackathon=self.hackathon, project=self.project)
        resp = self.client.post(self.url, {'project_id': str(self.project.id)}, format='json')
        self.assertEqual(resp.status_code, 400)

    def test_cannot_link_invisible_project(self):
        resp = self.client.post(self.url, {'project_id': str(self.foreign_project.id)}, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('project_id', resp.data)

    def test_unlink_unknown_is_not_found(self):
        resp = self.client.delete(f'{self.url}{self.project.id}/')
        self.assertEqual(resp.status_code, 404)
