import logging

from django.utils import timezone

from hackathon.models import Hackathon, HackathonMember
from project.models import Project, ProjectMember
from utils.exceptions import ReportGenerationFailed
from .pdf import render_user_report, report_filename
from .stats import compute_stats

logger = logging.getLogger(__name__)


class ReportService:
    """Builds statistics and downloadable reports for a user"""

    @staticmethod
    def collect_stats(user):
        projects = Project.objects.only('id', 'status', 'created_by')
        project_memberships = ProjectMember.objects.filter(user=user).only('project', 'user', 'role')
        hackathons = Hackathon.objects.only('id', 'status', 'created_by')
        hackathon_memberships = HackathonMember.objects.filter(user=user).only('hackathon', 'user', 'role')
        return compute_stats(user.id, projects, project_memberships, hackathons, hackathon_memberships)

    @staticmethod
    def build_report(user, generated_at=None):
        """
        Render the user's report.

        Returns:
            tuple: (filename, pdf bytes)

        Raises:
            ReportGenerationFailed: if the document could not be rendered
        """
        stats = ReportService.collect_stats(user)
        generated_at = generated_at or timezone.now()
        try:
            content = render_user_report(user, stats, generated_at)
        except Exception as e:
            logger.exception(f"Failed to render report for user {user.id}: {e}")
            raise ReportGenerationFailed()

        logger.info(f"Generated report for user {user.id}")
        return report_filename(user.full_name), content
