import logging
import uuid

from django.db.models import F
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from drf_yasg.utils import swagger_auto_schema

from team.roster import hackathon_roster
from team.views import EntityViewSet
from .models import Hackathon, HackathonProject
from .serializers import HackathonSerializer, HackathonProjectSerializer, LinkProjectSerializer

logger = logging.getLogger(__name__)


class HackathonViewSet(EntityViewSet):
    model = Hackathon
    serializer_class = HackathonSerializer
    roster_manager = hackathon_roster
    ordering = [F('start_date').desc(nulls_last=True), '-created_at']

    @swagger_auto_schema(
        operation_description="List hackathons you created or are a team member of, latest start date first.",
        tags=['hackathons']
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @swagger_auto_schema(
        operation_description="Create a hackathon. The authenticated user becomes its creator.",
        tags=['hackathons']
    )
    def create(self, request, *args, **kwargs):
        return super().create(request, *args, **kwargs)

    @swagger_auto_schema(
        responses={403: "Only the creator or team members can update", 404: "Hackathon not found"},
        operation_description="Update a hackathon (creator or team members).",
        tags=['hackathons']
    )
    def update(self, request, *args, **kwargs):
        return super().update(request, *args, **kwargs)

    @swagger_auto_schema(
        responses={204: "Hackathon deleted", 403: "Only the creator can delete", 404: "Hackathon not found"},
        operation_description="Delete a hackathon and its team (creator only).",
        tags=['hackathons']
    )
    def destroy(self, request, *args, **kwargs):
        return super().destroy(request, *args, **kwargs)

    def linked_projects_response(self, hackathon, status_code=status.HTTP_200_OK):
        links = (
            HackathonProject.objects
            .filter(hackathon=hackathon)
            .select_related('project', 'project__created_by')
            .order_by('created_at')
        )
        return Response(HackathonProjectSerializer(links, many=True).data, status=status_code)

    @swagger_auto_schema(
        method='get',
        responses={200: HackathonProjectSerializer(many=True)},
        operation_description="List the projects linked to this hackathon.",
        tags=['hackathons']
    )
    @swagger_auto_schema(
        method='post',
        request_body=LinkProjectSerializer,
        responses={
            201: HackathonProjectSerializer(many=True),
            400: "Bad Request - unknown or already linked project"
        },
        operation_description="Link one of your projects to this hackathon.",
        tags=['hackathons']
    )
    @action(detail=True, methods=['get', 'post'], serializer_class=LinkProjectSerializer)
    def projects(self, request, pk=None):
        hackathon = self.get_object()
        if request.method == 'GET':
            return self.linked_projects_response(hackathon)

        serializer = LinkProjectSerializer(data=request.data, context={'request': request, 'hackathon': hackathon})
        serializer.is_valid(raise_exception=True)
        link = serializer.save()
        logger.info(f"Linked project {link.project_id} to hackathon {hackathon.pk}")
        return self.linked_projects_response(hackathon, status.HTTP_201_CREATED)

    @swagger_auto_schema(
        method='delete',
        responses={200: HackathonProjectSerializer(many=True), 404: "Project is not linked"},
        operation_description="Unlink a project from this hackathon.",
        tags=['hackathons']
    )
    @action(detail=True, methods=['delete'], url_path=r'projects/(?P<project_id>[^/.]+)')
    def unlink_project(self, request, pk=None, project_id=None):
        hackathon = self.get_object()
        try:
            project_id = uuid.UUID(str(project_id))
        except ValueError:
            raise NotFound("Project is not linked to this hackathon.")

        link = HackathonProject.objects.filter(hackathon=hackathon, project_id=project_id).first()
        if link is None:
            raise NotFound("Project is not linked to this hackathon.")
        link.delete()
        logger.info(f"Unlinked project {project_id} from hackathon {hackathon.pk}")
        return self.linked_projects_response(hackathon)
