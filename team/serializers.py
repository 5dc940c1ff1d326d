import logging

from django.db import IntegrityError, transaction
from rest_framework import serializers

from accounts.models import User
from accounts.serializers import ProfileSerializer
from utils.tech_stack import TechStackField
from .models import ROLE_CHOICES, DEFAULT_ROLE
from .roster import MembershipError

logger = logging.getLogger(__name__)


class EntitySerializer(serializers.ModelSerializer):
    """Shared read/write shape of projects and hackathons."""
    tech_stack = TechStackField(required=False)
    created_by = serializers.SerializerMethodField()

    blank_as_null_fields = [
        'short_description', 'problem_statement', 'solution_description',
        'github_url', 'deployed_url', 'download_url', 'qr_code_url',
    ]

    class Meta:
        fields = [
            'id', 'title', 'short_description', 'problem_statement', 'solution_description',
            'tech_stack', 'github_url', 'deployed_url', 'download_url', 'qr_code_url',
            'status', 'created_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_created_by(self, obj):
        return {'id': obj.created_by_id, 'full_name': obj.created_by.full_name}

    def to_internal_value(self, data):
        # blank form fields are stored as null
        if isinstance(data, dict):
            data = data.copy()
            for field in self.blank_as_null_fields:
                if field in data and isinstance(data[field], str) and not data[field].strip():
                    data[field] = None
        return super().to_internal_value(data)

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Title is required.")
        return value


class MemberSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    user_id = serializers.UUIDField(read_only=True)
    role = serializers.CharField(read_only=True)
    is_lead = serializers.BooleanField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    profile = serializers.SerializerMethodField()

    def get_profile(self, obj):
        return ProfileSerializer(obj.user).data


class RosterSerializerMixin:
    """
    Expects ``entity``, ``roster``, ``manager`` and ``member_model`` in the
    serializer context.
    """

    def roster_error(self, error):
        return serializers.ValidationError(error.message, code=error.code)

    def explain_conflict(self, check):
        """
        A uniqueness constraint fired after validation passed; re-check against
        the current roster so the user gets the same message validation gives.
        """
        entity = self.context['entity']
        member_model = self.context['member_model']
        current = list(member_model.objects.filter(**{member_model.entity_field: entity}))
        try:
            check(current)
        except MembershipError as e:
            raise self.roster_error(e)


class AddMemberSerializer(RosterSerializerMixin, serializers.Serializer):
    user_id = serializers.UUIDField()
    role = serializers.ChoiceField(choices=ROLE_CHOICES, default=DEFAULT_ROLE)

    def validate_user_id(self, value):
        if not User.objects.filter(id=value, is_active=True).exists():
            raise serializers.ValidationError("User does not exist.")
        return value

    def validate(self, data):
        manager = self.context['manager']
        try:
            manager.check_add(self.context['roster'], data['user_id'], data['role'])
        except MembershipError as e:
            logger.info(f"Rejected adding user {data['user_id']} to {manager.entity_type}: {e.message}")
            raise self.roster_error(e)
        return data

    def create(self, validated_data):
        entity = self.context['entity']
        member_model = self.context['member_model']
        manager = self.context['manager']
        user_id = validated_data['user_id']
        role = validated_data['role']

        try:
            with transaction.atomic():
                member = member_model.objects.create(
                    **{member_model.entity_field: entity},
                    user_id=user_id,
                    role=role
                )
        except IntegrityError as e:
            logger.warning(f"Store rejected adding user {user_id} to {manager.entity_type} {entity.pk}: {e}")
            self.explain_conflict(lambda current: manager.check_add(current, user_id, role))
            raise

        logger.info(f"Added user {user_id} as {role} to {manager.entity_type} {entity.pk}")
        return member


class UpdateMemberRoleSerializer(RosterSerializerMixin, serializers.Serializer):
    role = serializers.ChoiceField(choices=ROLE_CHOICES)

    def validate(self, data):
        manager = self.context['manager']
        try:
            manager.check_role_change(self.context['roster'], self.instance.id, data['role'])
        except MembershipError as e:
            logger.info(f"Rejected role change of member {self.instance.id} on {manager.entity_type}: {e.message}")
            raise self.roster_error(e)
        return data

    def update(self, instance, validated_data):
        manager = self.context['manager']
        role = validated_data['role']

        instance.role = role
        try:
            with transaction.atomic():
                instance.save(update_fields=['role'])
        except IntegrityError as e:
            logger.warning(f"Store rejected role change of member {instance.id}: {e}")
            self.explain_conflict(lambda current: manager.check_role_change(current, instance.id, role))
            raise

        logger.info(f"Member {instance.id} of {manager.entity_type} {instance.entity_id} is now {role}")
        return instance
