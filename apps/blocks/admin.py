"""
Admin configuration for blocks app.
"""

from django.contrib import admin

from .models import BlockInstance, BlockPosition, CapabilityOverride


class BlockPositionInline(admin.TabularInline):
    model = BlockPosition
    extra = 0
    fields = ('pagetype', 'region', 'weight', 'visible')


class CapabilityOverrideInline(admin.TabularInline):
    model = CapabilityOverride
    extra = 0
    fields = ('role', 'capability', 'allow')


@admin.register(BlockInstance)
class BlockInstanceAdmin(admin.ModelAdmin):
    """Admin for BlockInstance model."""

    list_display = (
        'id', 'blockname', 'parent_context_level',
        'parent_instance_id', 'time_modified'
    )
    list_filter = ('blockname', 'parent_context_level')
    search_fields = ('blockname',)
    ordering = ('id',)
    readonly_fields = ('decoded_config', 'time_created', 'time_modified')
    inlines = [BlockPositionInline, CapabilityOverrideInline]

    fieldsets = (
        (None, {
            'fields': ('blockname', 'parent_context_level', 'parent_instance_id')
        }),
        ('Configuration', {
            'fields': ('configdata', 'decoded_config'),
        }),
        ('Timestamps', {
            'fields': ('time_created', 'time_modified'),
            'classes': ('collapse',),
        }),
    )

    def decoded_config(self, obj):
        """Show the decoded configuration."""
        return obj.get_config()
    decoded_config.short_description = 'Decoded configuration'
