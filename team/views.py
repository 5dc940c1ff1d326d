import logging
import uuid

from django.db import transaction
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet
from drf_yasg.utils import swagger_auto_schema

from realtime.feed import UPDATE, broadcast_change
from .serializers import MemberSerializer, AddMemberSerializer, UpdateMemberRoleSerializer
from .visibility import visible_entities

logger = logging.getLogger(__name__)


class EntityViewSet(ModelViewSet):
    """
    CRUD plus team roster endpoints for an entity type that has a
    ``members`` roster. Subclasses set ``model``, ``serializer_class``,
    ``roster_manager`` and ``ordering``.
    """
    permission_classes = [IsAuthenticated]
    model = None
    roster_manager = None
    ordering = ['-created_at']

    @property
    def entity_type(self):
        return self.roster_manager.entity_type

    @property
    def member_model(self):
        return self.model.member_model()

    @property
    def entity_key(self):
        return f'{self.member_model.entity_field}_id'

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return self.model.objects.none()
        return self.model.objects.visible_to(self.request.user).select_related('created_by').order_by(*self.ordering)

    def list(self, request, *args, **kwargs):
        entities = list(self.model.objects.select_related('created_by').order_by(*self.ordering))
        memberships = list(self.member_model.objects.filter(user=request.user))
        visible = visible_entities(entities, memberships, request.user.id, self.entity_key)
        serializer = self.get_serializer(visible, many=True)
        return Response(serializer.data)

    def perform_create(self, serializer):
        entity = serializer.save(created_by=self.request.user)
        logger.info(f"User {self.request.user.id} created {self.entity_type} {entity.pk}")

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        changes = dict(serializer.validated_data)
        changes['updated_at'] = timezone.now()

        with transaction.atomic():
            affected = self.model.objects.visible_to(request.user).filter(pk=instance.pk).update(**changes)
            if not affected:
                logger.warning(
                    f"Update of {self.entity_type} {instance.pk} by user {request.user.id} affected no rows"
                )
                if instance.created_by_id == request.user.id:
                    affected = self.model.objects.filter(pk=instance.pk, created_by=request.user).update(**changes)

        if not affected:
            if not self.model.objects.filter(pk=instance.pk).exists():
                raise NotFound(f"{self.entity_type.capitalize()} not found.")
            raise PermissionDenied(
                f"You do not have permission to update this {self.entity_type}. "
                f"Only the creator or team members can update."
            )

        broadcast_change(self.model._meta.db_table, 'id', instance.pk, UPDATE)
        instance.refresh_from_db()
        logger.info(f"User {request.user.id} updated {self.entity_type} {instance.pk}")
        return Response(self.get_serializer(instance).data)

    def perform_destroy(self, instance):
        if instance.created_by_id != self.request.user.id:
            raise PermissionDenied(f"Only the creator can delete this {self.entity_type}.")
        entity_id = instance.pk
        instance.delete()
        logger.info(f"User {self.request.user.id} deleted {self.entity_type} {entity_id}")

    # roster

    def get_roster(self, entity):
        return list(
            self.member_model.objects
            .filter(**{self.member_model.entity_field: entity})
            .select_related('user')
            .order_by('created_at')
        )

    def roster_context(self, entity, roster):
        return {
            'request': self.request,
            'entity': entity,
            'roster': roster,
            'manager': self.roster_manager,
            'member_model': self.member_model,
        }

    def roster_response(self, entity, status_code=status.HTTP_200_OK):
        # always answer with a fresh read of the roster, never the speculative one
        return Response(MemberSerializer(self.get_roster(entity), many=True).data, status=status_code)

    def get_member(self, roster, member_id):
        try:
            member_id = uuid.UUID(str(member_id))
        except ValueError:
            raise NotFound("Team member not found.")
        member = self.roster_manager.find_member(roster, member_id)
        if member is None:
            raise NotFound("Team member not found.")
        return member

    @swagger_auto_schema(
        method='get',
        responses={200: MemberSerializer(many=True)},
        operation_description="List the team members of the entity in the order they were added."
    )
    @swagger_auto_schema(
        method='post',
        request_body=AddMemberSerializer,
        responses={
            201: MemberSerializer(many=True),
            400: "Bad Request - duplicate member or second Team Lead",
            404: "Not found"
        },
        operation_description="Add a team member with a role. At most one Team Lead and no duplicate users per team."
    )
    @action(detail=True, methods=['get', 'post'], serializer_class=AddMemberSerializer)
    def members(self, request, pk=None):
        entity = self.get_object()
        if request.method == 'GET':
            return self.roster_response(entity)

        roster = self.get_roster(entity)
        serializer = AddMemberSerializer(data=request.data, context=self.roster_context(entity, roster))
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return self.roster_response(entity, status.HTTP_201_CREATED)

    @swagger_auto_schema(
        method='patch',
        request_body=UpdateMemberRoleSerializer,
        responses={
            200: MemberSerializer(many=True),
            400: "Bad Request - second Team Lead",
            404: "Team member not found"
        },
        operation_description="Change a team member's role."
    )
    @swagger_auto_schema(
        method='delete',
        responses={
            200: MemberSerializer(many=True),
            404: "Team member not found"
        },
        operation_description="Remove a team member."
    )
    @action(detail=True, methods=['patch', 'delete'], url_path=r'members/(?P<member_id>[^/.]+)',
            serializer_class=UpdateMemberRoleSerializer)
    def member_detail(self, request, pk=None, member_id=None):
        entity = self.get_object()
        roster = self.get_roster(entity)
        member = self.get_member(roster, member_id)

        if request.method == 'DELETE':
            remaining = self.roster_manager.remove_member(roster, member.id)
            if len(remaining) == len(roster):
                raise NotFound("Team member not found.")
            member.delete()
            logger.info(f"Removed member {member.id} from {self.entity_type} {entity.pk}")
            return self.roster_response(entity)

        serializer = UpdateMemberRoleSerializer(member, data=request.data, context=self.roster_context(entity, roster))
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return self.roster_response(entity)
