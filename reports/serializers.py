from rest_framework import serializers


class UserStatsSerializer(serializers.Serializer):
    total_projects = serializers.IntegerField()
    completed_projects = serializers.IntegerField()
    in_progress_projects = serializers.IntegerField()
    aborted_projects = serializers.IntegerField()
    projects_led = serializers.IntegerField()
    total_hackathons = serializers.IntegerField()
    upcoming_hackathons = serializers.IntegerField()
    ongoing_hackathons = serializers.IntegerField()
    completed_hackathons = serializers.IntegerField()
    hackathons_led = serializers.IntegerField()
