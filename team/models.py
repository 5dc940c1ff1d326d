import uuid

from django.db import models
from django.db.models import Q

TEAM_LEAD = 'Team Lead'

ROLE_CHOICES = [
    (TEAM_LEAD, 'Team Lead'),
    ('Frontend Developer', 'Frontend Developer'),
    ('Backend Developer', 'Backend Developer'),
    ('Full Stack Developer', 'Full Stack Developer'),
    ('Designer', 'Designer'),
    ('Other', 'Other'),
]

ROLES = [value for value, _ in ROLE_CHOICES]

DEFAULT_ROLE = 'Frontend Developer'


class EntityQuerySet(models.QuerySet):
    def memberships_of(self, user):
        member_model = self.model.member_model()
        return member_model.objects.filter(user=user).values(member_model.entity_field)

    def visible_to(self, user):
        """Entities the user created or is on the team of."""
        return self.filter(Q(created_by=user) | Q(pk__in=self.memberships_of(user)))

    def shared_with(self, user):
        return self.filter(pk__in=self.memberships_of(user))


class Entity(models.Model):
    """Fields common to projects and hackathons."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200, null=False, blank=False)
    short_description = models.TextField(null=True, blank=True)
    problem_statement = models.TextField(null=True, blank=True)
    solution_description = models.TextField(null=True, blank=True)
    tech_stack = models.JSONField(default=list, blank=True)
    github_url = models.URLField("github url", max_length=500, null=True, blank=True)
    deployed_url = models.URLField("deployed url", max_length=500, null=True, blank=True)
    download_url = models.URLField("download url", max_length=500, null=True, blank=True)
    qr_code_url = models.URLField("QR code url", max_length=500, null=True, blank=True)
    created_by = models.ForeignKey('accounts.User', related_name='+', on_delete=models.CASCADE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = EntityQuerySet.as_manager()

    class Meta:
        abstract = True

    def __str__(self):
        return self.title

    @classmethod
    def member_model(cls):
        return cls._meta.get_field('members').related_model


class Membership(models.Model):
    """
    One user on one entity's roster. Concrete subclasses add the foreign key
    to their entity and declare the roster constraints against it.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', related_name='+', on_delete=models.CASCADE)
    role = models.CharField(max_length=30, choices=ROLE_CHOICES, default=DEFAULT_ROLE)
    created_at = models.DateTimeField(auto_now_add=True)

    # name of the foreign key to the owning entity, e.g. 'project'
    entity_field = None

    class Meta:
        abstract = True
        ordering = ['created_at']

    @property
    def is_lead(self):
        return self.role == TEAM_LEAD

    @property
    def entity_id(self):
        return getattr(self, f'{self.entity_field}_id')

    def __str__(self):
        return f"{self.user} ({self.role})"
