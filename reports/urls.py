from django.urls import path
from .views import UserStatsView, UserReportDownloadView

urlpatterns = [
    path('stats/', UserStatsView.as_view(), name='user_stats'),
    path('download/', UserReportDownloadView.as_view(), name='user_report_download'),
]
