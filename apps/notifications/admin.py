"""
Admin configuration for notifications app.
"""

from django.contrib import admin

from .models import ProgressRecord


@admin.register(ProgressRecord)
class ProgressRecordAdmin(admin.ModelAdmin):
    """Read-only view of the progress cache."""

    list_display = ('block_instance', 'user', 'percentage', 'time_modified')
    list_filter = ('block_instance',)
    search_fields = ('user__email', 'user__first_name', 'user__last_name')
    ordering = ('-time_modified',)

    readonly_fields = ('block_instance', 'user', 'percentage', 'time_modified')

    def has_add_permission(self, request):
        """Cache rows are written by the reminder job only."""
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('block_instance', 'user')
