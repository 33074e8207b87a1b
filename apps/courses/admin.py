"""
Admin configuration for courses app.
"""

from django.contrib import admin

from .models import Course, Enrollment, Group, Grouping, Activity, ActivityCompletion


class ActivityInline(admin.TabularInline):
    model = Activity
    extra = 0
    fields = ('name', 'completion_enabled', 'visible', 'restricted_to_group', 'position')


class EnrollmentInline(admin.TabularInline):
    model = Enrollment
    extra = 0
    fields = ('user', 'role', 'status', 'time_start', 'time_end')
    autocomplete_fields = ('user',)


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    """Admin for Course model."""

    list_display = ('fullname', 'shortname', 'enable_completion', 'visible', 'created_at')
    list_filter = ('enable_completion', 'visible')
    search_fields = ('fullname', 'shortname')
    ordering = ('fullname',)
    readonly_fields = ('created_at', 'updated_at')
    inlines = [ActivityInline, EnrollmentInline]


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    """Admin for Enrollment model."""

    list_display = ('user', 'course', 'role', 'status', 'time_start', 'time_end')
    list_filter = ('role', 'status', 'course')
    search_fields = ('user__email', 'user__first_name', 'user__last_name', 'course__shortname')
    autocomplete_fields = ('user',)

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('user', 'course')


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    list_display = ('name', 'course')
    list_filter = ('course',)
    search_fields = ('name',)
    filter_horizontal = ('members',)


@admin.register(Grouping)
class GroupingAdmin(admin.ModelAdmin):
    list_display = ('name', 'course')
    list_filter = ('course',)
    search_fields = ('name',)
    filter_horizontal = ('groups',)


@admin.register(ActivityCompletion)
class ActivityCompletionAdmin(admin.ModelAdmin):
    list_display = ('activity', 'user', 'completed', 'time_modified')
    list_filter = ('completed', 'activity__course')
    search_fields = ('user__email', 'activity__name')
    readonly_fields = ('time_modified',)
