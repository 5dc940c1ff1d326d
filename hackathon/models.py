import uuid

from django.db import models
from django.db.models import Q

from team.models import Entity, Membership, TEAM_LEAD


class Hackathon(Entity):
    STATUS_CHOICES = [
        ('upcoming', 'Upcoming'),
        ('ongoing', 'Ongoing'),
        ('completed', 'Completed'),
    ]

    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='upcoming')

    class Meta:
        db_table = 'hackathons'
        indexes = [
            models.Index(fields=['-start_date'], name='hack_start_idx'),
            models.Index(fields=['created_by', '-created_at'], name='hack_creator_idx'),
        ]
        ordering = ['-start_date', '-created_at']


class HackathonMember(Membership):
    hackathon = models.ForeignKey(Hackathon, related_name='members', on_delete=models.CASCADE)

    entity_field = 'hackathon'

    class Meta:
        db_table = 'hackathon_members'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['hackathon', 'user'], name='unique_hackathon_member'),
            models.UniqueConstraint(fields=['hackathon'], condition=Q(role=TEAM_LEAD), name='one_lead_per_hackathon'),
        ]


class HackathonProject(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    hackathon = models.ForeignKey(Hackathon, related_name='linked_projects', on_delete=models.CASCADE)
    project = models.ForeignKey('project.Project', related_name='hackathon_links', on_delete=models.CASCADE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'hackathon_projects'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['hackathon', 'project'], name='unique_hackathon_project'),
        ]

    def __str__(self):
        return f"{self.project} in {self.hackathon}"
