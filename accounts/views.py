import logging

from rest_framework import status
from rest_framework.generics import GenericAPIView, ListAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_yasg.utils import swagger_auto_schema

from .models import User
from .serializers import ProfileSerializer, LogoutSerializer

logger = logging.getLogger(__name__)


class MeView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ProfileSerializer

    @swagger_auto_schema(
        responses={
            200: ProfileSerializer,
            401: "Unauthorized"
        },
        operation_description="Retrieve the profile of the authenticated user.",
        tags=['account']
    )
    def get(self, request):
        return Response(ProfileSerializer(request.user).data, status=status.HTTP_200_OK)


class ProfileListView(ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ProfileSerializer
    pagination_class = None

    def get_queryset(self):
        return User.objects.filter(is_active=True).order_by('full_name', 'email')

    @swagger_auto_schema(
        responses={
            200: ProfileSerializer(many=True)
        },
        operation_description="List all user profiles, ordered by full name. Used to pick team members.",
        tags=['account']
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class LogoutView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = LogoutSerializer

    @swagger_auto_schema(
        request_body=LogoutSerializer,
        responses={
            205: "Signed out",
            400: "Bad Request"
        },
        operation_description="Sign out by blacklisting the given refresh token.",
        tags=['account']
    )
    def post(self, request):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info(f"User {request.user.id} signed out")
        return Response({"message": "Signed out successfully."}, status=status.HTTP_205_RESET_CONTENT)
