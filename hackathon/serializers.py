from rest_framework import serializers

from project.models import Project
from project.serializers import ProjectSerializer
from team.serializers import EntitySerializer
from .models import Hackathon, HackathonProject


class HackathonSerializer(EntitySerializer):
    blank_as_null_fields = EntitySerializer.blank_as_null_fields + ['start_date', 'end_date']

    class Meta(EntitySerializer.Meta):
        model = Hackathon
        fields = EntitySerializer.Meta.fields + ['start_date', 'end_date']


class HackathonProjectSerializer(serializers.ModelSerializer):
    project = ProjectSerializer(read_only=True)

    class Meta:
        model = HackathonProject
        fields = ['id', 'project', 'created_at']


class LinkProjectSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()

    def validate_project_id(self, value):
        request = self.context.get('request')
        if not request:
            raise serializers.ValidationError("Request context is required.")
        if not Project.objects.visible_to(request.user).filter(pk=value).exists():
            raise serializers.ValidationError("Project does not exist.")
        return value

    def validate(self, data):
        hackathon = self.context['hackathon']
        if HackathonProject.objects.filter(hackathon=hackathon, project_id=data['project_id']).exists():
            raise serializers.ValidationError("This project is already linked to this hackathon.")
        return data

    def create(self, validated_data):
        return HackathonProject.objects.create(
            hackathon=self.context['hackathon'],
            project_id=validated_data['project_id']
        )
