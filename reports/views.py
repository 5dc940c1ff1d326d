from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema

from .serializers import UserStatsSerializer
from .services import ReportService


class UserStatsView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        responses={200: UserStatsSerializer},
        operation_description="Project and hackathon counts for the authenticated user.",
        tags=['reports']
    )
    def get(self, request):
        stats = ReportService.collect_stats(request.user)
        return Response(UserStatsSerializer(stats).data, status=status.HTTP_200_OK)


class UserReportDownloadView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        responses={
            200: openapi.Response("PDF report", schema=openapi.Schema(type=openapi.TYPE_FILE)),
            500: "Report could not be generated"
        },
        operation_description="Download the authenticated user's statistics report as a PDF.",
        tags=['reports']
    )
    def get(self, request):
        filename, content = ReportService.build_report(request.user)
        response = HttpResponse(content, content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response
