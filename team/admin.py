from django.contrib import admin


class MembershipInline(admin.TabularInline):
    """Roster editor shown on the project and hackathon admin pages."""
    extra = 0
    fields = ['user', 'role', 'created_at']
    readonly_fields = ['created_at']
    autocomplete_fields = ['user']


class EntityAdmin(admin.ModelAdmin):
    list_display = ['title', 'status', 'created_by', 'member_count', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['title', 'short_description', 'created_by__email', 'created_by__full_name']
    readonly_fields = ['created_at', 'updated_at']

    def member_count(self, obj):
        return obj.members.count()
    member_count.short_description = 'Members'
