"""Per-user counts over projects, hackathons and the teams the user is on."""
from dataclasses import asdict, dataclass

from team.models import TEAM_LEAD


@dataclass(frozen=True)
class UserStats:
    total_projects: int = 0
    completed_projects: int = 0
    in_progress_projects: int = 0
    aborted_projects: int = 0
    projects_led: int = 0
    total_hackathons: int = 0
    upcoming_hackathons: int = 0
    ongoing_hackathons: int = 0
    completed_hackathons: int = 0
    hackathons_led: int = 0

    def as_dict(self):
        return asdict(self)


def _mine(user_id, entities, memberships, entity_key):
    ids = {e.id for e in entities if e.created_by_id == user_id}
    ids.update(getattr(m, entity_key) for m in memberships if m.user_id == user_id)
    return [e for e in entities if e.id in ids]


def _count_status(entities, status):
    return sum(1 for e in entities if e.status == status)


def _count_led(user_id, memberships):
    return sum(1 for m in memberships if m.user_id == user_id and m.role == TEAM_LEAD)


def compute_stats(user_id, projects, project_memberships, hackathons, hackathon_memberships):
    """
    Aggregate the user's project and hackathon counts.

    "Mine" means created by the user or having the user on the team; "led"
    counts the user's memberships with the Team Lead role. Memberships of
    other users may be passed in and are ignored.
    """
    projects = list(projects)
    project_memberships = list(project_memberships)
    hackathons = list(hackathons)
    hackathon_memberships = list(hackathon_memberships)

    my_projects = _mine(user_id, projects, project_memberships, 'project_id')
    my_hackathons = _mine(user_id, hackathons, hackathon_memberships, 'hackathon_id')

    return UserStats(
        total_projects=len(my_projects),
        completed_projects=_count_status(my_projects, 'completed'),
        in_progress_projects=_count_status(my_projects, 'in_progress'),
        aborted_projects=_count_status(my_projects, 'aborted'),
        projects_led=_count_led(user_id, project_memberships),
        total_hackathons=len(my_hackathons),
        upcoming_hackathons=_count_status(my_hackathons, 'upcoming'),
        ongoing_hackathons=_count_status(my_hackathons, 'ongoing'),
        completed_hackathons=_count_status(my_hackathons, 'completed'),
        hackathons_led=_count_led(user_id, hackathon_memberships),
    )
