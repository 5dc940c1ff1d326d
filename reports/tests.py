import datetime
from types import SimpleNamespace
from unittest import mock

from django.test import SimpleTestCase, TestCase
from rest_framework.test import APIClient

from accounts.models import User
from hackathon.models import Hackathon, HackathonMember
from project.models import Project, ProjectMember
from team.models import TEAM_LEAD
from .pdf import render_user_report, report_filename, report_lines
from .stats import UserStats, compute_stats


def project(pid, created_by, status):
    return SimpleNamespace(id=pid, created_by_id=created_by, status=status)


def project_member(pid, user_id, role):
    return SimpleNamespace(project_id=pid, user_id=user_id, role=role)


def hackathon_member(hid, user_id, role):
    return SimpleNamespace(hackathon_id=hid, user_id=user_id, role=role)


class ComputeStatsTest(SimpleTestCase):
    def test_empty_history_is_all_zero(self):
        self.assertEqual(compute_stats('u1', [], [], [], []), UserStats())
        self.assertTrue(all(value == 0 for value in UserStats().as_dict().values()))

    def test_created_and_joined_projects(self):
        projects = [project('P1', 'U1', 'completed'), project('P2', 'U2', 'in_progress')]
        memberships = [project_member('P2', 'U1', 'Frontend Developer')]

        stats = compute_stats('U1', projects, memberships, [], [])

        self.assertEqual(stats.total_projects, 2)
        self.assertEqual(stats.completed_projects, 1)
        self.assertEqual(stats.in_progress_projects, 1)
        self.assertEqual(stats.aborted_projects, 0)
        self.assertEqual(stats.projects_led, 0)

    def test_created_and_member_counts_once(self):
        projects = [project('P1', 'U1', 'aborted')]
        memberships = [project_member('P1', 'U1', TEAM_LEAD)]
        stats = compute_stats('U1', projects, memberships, [], [])
        self.assertEqual(stats.total_projects, 1)
        self.assertEqual(stats.aborted_projects, 1)
        self.assertEqual(stats.projects_led, 1)

    def test_other_users_memberships_are_ignored(self):
        projects = [project('P1', 'U2', 'completed')]
        memberships = [project_member('P1', 'U2', TEAM_LEAD)]
        stats = compute_stats('U1', projects, memberships, [], [])
        self.assertEqual(stats, UserStats())

    def test_hackathons_grouped_by_status(self):
        hackathons = [
            project('H1', 'U1', 'upcoming'),
            project('H2', 'U2', 'ongoing'),
            project('H3', 'U2', 'completed'),
            project('H4', 'U2', 'completed'),
        ]
        memberships = [hackathon_member('H2', 'U1', TEAM_LEAD), hackathon_member('H3', 'U1', 'Designer')]

        stats = compute_stats('U1', [], [], hackathons, memberships)

        self.assertEqual(stats.total_hackathons, 3)
        self.assertEqual(stats.upcoming_hackathons, 1)
        self.assertEqual(stats.ongoing_hackathons, 1)
        self.assertEqual(stats.completed_hackathons, 1)
        self.assertEqual(stats.hackathons_led, 1)

    def test_same_input_same_output(self):
        projects = [project('P1', 'U1', 'completed')]
        first = compute_stats('U1', projects, [], [], [])
        second = compute_stats('U1', projects, [], [], [])
        self.assertEqual(first.as_dict(), second.as_dict())


class ReportRenderingTest(SimpleTestCase):
    def setUp(self):
        self.profile = SimpleNamespace(full_name='Ada  Lovelace', email='ada@example.com')
        self.stats = UserStats(total_projects=3, completed_projects=2, projects_led=1, total_hackathons=1)
        self.generated_at = datetime.datetime(2024, 5, 17, 12, 0)

    def test_filename_collapses_whitespace(self):
        self.assertEqual(report_filename('Ada  Lovelace'), 'Ada_Lovelace_report.pdf')
        self.assertEqual(report_filename(''), 'user_report.pdf')

    def test_lines_follow_fixed_layout(self):
        lines = [text for text, _ in report_lines(self.profile, self.stats, self.generated_at)]
        self.assertEqual(lines[:3], ['Name: Ada  Lovelace', 'Email: ada@example.com', 'Generated: 2024-05-17'])
        self.assertEqual(lines[3], 'Total Projects: 3')
        self.assertEqual(lines[4], '  - Completed: 2')
        self.assertIn('Projects Led: 1', lines)
        self.assertIn('Hackathons Led: 0', lines)

    def test_render_produces_pdf(self):
        content = render_user_report(self.profile, self.stats, self.generated_at)
        self.assertTrue(content.startswith(b'%PDF'))


class ReportApiTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email='ada@example.com', full_name='Ada Lovelace', password='password123')
        self.other = User.objects.create_user(email='bob@example.com', full_name='Bob', password='password123')

        Project.objects.create(title='Mine', created_by=self.user, status='completed')
        joined = Project.objects.create(title='Joined', created_by=self.other, status='in_progress')
        Project.objects.create(title='Not mine', created_by=self.other, status='aborted')
        ProjectMember.objects.create(project=joined, user=self.user, role=TEAM_LEAD)

        jam = Hackathon.objects.create(title='Jam', created_by=self.other, status='ongoing')
        HackathonMember.objects.create(hackathon=jam, user=self.user, role='Designer')

        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def test_stats(self):
        resp = self.client.get('/api/v1/reports/stats/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data['total_projects'], 2)
        self.assertEqual(resp.data['completed_projects'], 1)
        self.assertEqual(resp.data['in_progress_projects'], 1)
        self.assertEqual(resp.data['aborted_projects'], 0)
        self.assertEqual(resp.data['projects_led'], 1)
        self.assertEqual(resp.data['total_hackathons'], 1)
        self.assertEqual(resp.data['ongoing_hackathons'], 1)
        self.assertEqual(resp.data['hackathons_led'], 0)

    def test_stats_for_new_user_are_zero(self):
        newcomer = User.objects.create_user(email='new@example.com', full_name='New', password='password123')
        self.client.force_authenticate(user=newcomer)
        resp = self.client.get('/api/v1/reports/stats/')
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(all(value == 0 for value in resp.data.values()))

    def test_download(self):
        resp = self.client.get('/api/v1/reports/download/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp['Content-Type'], 'application/pdf')
        self.assertIn('Ada_Lovelace_report.pdf', resp['Content-Disposition'])
        self.assertTrue(resp.content.startswith(b'%PDF'))

    def test_render_failure_is_reported(self):
        with mock.patch('reports.services.render_user_report', side_effect=RuntimeError('font missing')):
            resp = self.client.get('/api/v1/reports/download/')
        self.assertEqual(resp.status_code, 500)
        self.assertIn('Failed to generate the report', str(resp.data['detail']))
