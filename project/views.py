from drf_yasg.utils import swagger_auto_schema

from team.roster import project_roster
from team.views import EntityViewSet
from .models import Project
from .serializers import ProjectSerializer


class ProjectViewSet(EntityViewSet):
    model = Project
    serializer_class = ProjectSerializer
    roster_manager = project_roster
    ordering = ['-created_at']

    @swagger_auto_schema(
        operation_description="List projects you created or are a team member of, newest first.",
        tags=['projects']
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @swagger_auto_schema(
        operation_description="Create a project. The authenticated user becomes its creator.",
        tags=['projects']
    )
    def create(self, request, *args, **kwargs):
        return super().create(request, *args, **kwargs)

    @swagger_auto_schema(
        responses={403: "Only the creator or team members can update", 404: "Project not found"},
        operation_description="Update a project (creator or team members).",
        tags=['projects']
    )
    def update(self, request, *args, **kwargs):
        return super().update(request, *args, **kwargs)

    @swagger_auto_schema(
        responses={204: "Project deleted", 403: "Only the creator can delete", 404: "Project not found"},
        operation_description="Delete a project and its team (creator only).",
        tags=['projects']
    )
    def destroy(self, request, *args, **kwargs):
        return super().destroy(request, *args, **kwargs)
