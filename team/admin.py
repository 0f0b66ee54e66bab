from django.contrib import admin
from django_summernote.admin import SummernoteModelAdmin

from team.models import Team, TeamMembership


class TeamMembershipInline(admin.TabularInline):
    model = TeamMembership
    extra = 1


@admin.register(Team)
class TeamAdmin(SummernoteModelAdmin):
    list_display = ('name', 'owner', 'created_at')
    search_fields = ('name', 'description', 'owner__email')
    inlines = [TeamMembershipInline]
    summernote_fields = ('description',)


@admin.register(TeamMembership)
class TeamMembershipAdmin(admin.ModelAdmin):
    list_display = ('team', 'user', 'role', 'joined_at')
    list_filter = ('role',)
    search_fields = ('team__name', 'user__email')
