"""
Roster rules shared by project and hackathon teams.

A roster is any sequence of membership-like objects exposing ``id``,
``user_id`` and ``role``. Operations never mutate the roster they are given;
they return a new list, or raise ``MembershipError`` and leave it untouched.
"""
import copy
import logging
from dataclasses import dataclass
from typing import Any, Optional

from .models import ROLES, TEAM_LEAD

logger = logging.getLogger(__name__)


class MembershipError(Exception):
    """Raised when a roster change would break a team invariant."""

    def __init__(self, message, code='invalid'):
        super().__init__(message)
        self.message = message
        self.code = code


@dataclass
class RosterEntry:
    user_id: Any
    role: str
    id: Optional[Any] = None


class MembershipManager:
    def __init__(self, entity_type):
        self.entity_type = entity_type

    def __repr__(self):
        return f"MembershipManager({self.entity_type!r})"

    def check_role(self, role):
        if role not in ROLES:
            raise MembershipError(f"'{role}' is not a valid role.", code='invalid_role')

    def find_lead(self, roster, exclude_id=None):
        for member in roster:
            if member.role == TEAM_LEAD and (exclude_id is None or member.id != exclude_id):
                return member
        return None

    def find_member(self, roster, member_id):
        for member in roster:
            if member.id == member_id:
                return member
        return None

    def check_add(self, roster, user_id, role):
        self.check_role(role)
        if role == TEAM_LEAD and self.find_lead(roster) is not None:
            raise MembershipError(
                f"A {self.entity_type} can only have one Team Lead. "
                f"Please change the existing Team Lead's role first.",
                code='duplicate_lead'
            )
        if any(member.user_id == user_id for member in roster):
            raise MembershipError("This user is already a team member.", code='duplicate_member')

    def check_role_change(self, roster, member_id, new_role):
        self.check_role(new_role)
        if new_role == TEAM_LEAD and self.find_lead(roster, exclude_id=member_id) is not None:
            raise MembershipError(
                f"A {self.entity_type} can only have one Team Lead. "
                f"Please change the existing Team Lead's role first.",
                code='duplicate_lead'
            )

    def add_member(self, roster, user_id, role, member_id=None):
        try:
            self.check_add(roster, user_id, role)
        except MembershipError as e:
            logger.info(f"Rejected adding user {user_id} as {role} to {self.entity_type}: {e.message}")
            raise
        return list(roster) + [RosterEntry(user_id=user_id, role=role, id=member_id)]

    def update_member_role(self, roster, member_id, new_role):
        try:
            self.check_role_change(roster, member_id, new_role)
        except MembershipError as e:
            logger.info(f"Rejected role change of member {member_id} on {self.entity_type}: {e.message}")
            raise

        updated = []
        for member in roster:
            if member.id == member_id:
                member = copy.copy(member)
                member.role = new_role
            updated.append(member)
        return updated

    def remove_member(self, roster, member_id):
        return [member for member in roster if member.id != member_id]


project_roster = MembershipManager('project')
hackathon_roster = MembershipManager('hackathon')
