from django.contrib import admin
from team.admin import EntityAdmin, MembershipInline
from .models import Hackathon, HackathonMember, HackathonProject

# Register your models here.

class HackathonMemberInline(MembershipInline):
    model = HackathonMember


class HackathonProjectInline(admin.TabularInline):
    model = HackathonProject
    extra = 0
    readonly_fields = ['created_at']


@admin.register(Hackathon)
class HackathonAdmin(EntityAdmin):
    list_display = ['title', 'status', 'start_date', 'end_date', 'created_by', 'member_count']
    list_filter = ['status', 'start_date', 'end_date']
    inlines = [HackathonMemberInline, HackathonProjectInline]
    fieldsets = (
        ('Basic Information', {
            'fields': ('title', 'short_description', 'problem_statement', 'solution_description', 'tech_stack')
        }),
        ('Event Details', {
            'fields': ('start_date', 'end_date', 'status', 'created_by')
        }),
        ('Links', {
            'fields': ('github_url', 'deployed_url', 'download_url', 'qr_code_url')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
