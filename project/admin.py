from django.contrib import admin
from team.admin import EntityAdmin, MembershipInline
from .models import Project, ProjectMember

# Register your models here.

class ProjectMemberInline(MembershipInline):
    model = ProjectMember


@admin.register(Project)
class ProjectAdmin(EntityAdmin):
    inlines = [ProjectMemberInline]
    fieldsets = (
        ('Basic Information', {
            'fields': ('title', 'short_description', 'problem_statement', 'solution_description', 'tech_stack')
        }),
        ('Links', {
            'fields': ('github_url', 'deployed_url', 'download_url', 'qr_code_url')
        }),
        ('Status', {
            'fields': ('status', 'created_by')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
