from django.db import models
from django.db.models import Q

from team.models import Entity, Membership, TEAM_LEAD


class Project(Entity):
    STATUS_CHOICES = [
        ('completed', 'Completed'),
        ('in_progress', 'In Progress'),
        ('aborted', 'Aborted'),
    ]

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='in_progress')

    class Meta:
        db_table = 'projects'
        indexes = [
            models.Index(fields=['-created_at'], name='proj_created_idx'),
            models.Index(fields=['created_by', '-created_at'], name='proj_creator_idx'),
        ]
        ordering = ['-created_at']


class ProjectMember(Membership):
    project = models.ForeignKey(Project, related_name='members', on_delete=models.CASCADE)

    entity_field = 'project'

    class Meta:
        db_table = 'project_members'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['project', 'user'], name='unique_project_member'),
            models.UniqueConstraint(fields=['project'], condition=Q(role=TEAM_LEAD), name='one_lead_per_project'),
        ]
