from team.serializers import EntitySerializer
from .models import Project


class ProjectSerializer(EntitySerializer):
    class Meta(EntitySerializer.Meta):
        model = Project
