import operator
import re
from functools import reduce

import django_filters
from django.db import connections
from django.db.models import Q
from rest_framework.filters import BaseFilterBackend

from task.models import Priority, Status, Task


class TaskFilter(django_filters.FilterSet):
    """Conjunctive exact-match filters for the task list."""
    status = django_filters.ChoiceFilter(choices=Status.choices)
    priority = django_filters.ChoiceFilter(choices=Priority.choices)
    assigned_to = django_filters.NumberFilter(field_name='assigned_to_id')
    created_by = django_filters.NumberFilter(field_name='created_by_id')
    team = django_filters.NumberFilter(field_name='team_id')

    class Meta:
        model = Task
        fields = ['status', 'priority', 'assigned_to', 'created_by', 'team']


class TaskSortFilter(BaseFilterBackend):
    """
    ``?sort_by=<field>&order=asc|desc``. Unknown fields fall back to
    ``created_at``; anything other than ``asc`` sorts descending.
    """
    sort_param = 'sort_by'
    order_param = 'order'
    default_field = 'created_at'
    sortable_fields = (
        'created_at',
        'updated_at',
        'due_date',
        'priority',
        'status',
        'title',
        'completed_at',
    )

    def get_ordering(self, request):
        field = request.query_params.get(self.sort_param, self.default_field)
        if field not in self.sortable_fields:
            field = self.default_field

        descending = request.query_params.get(self.order_param, 'desc').lower() != 'asc'
        prefix = '-' if descending else ''
        # id as tie-breaker keeps pages stable
        return [f"{prefix}{field}", f"{prefix}id"]

    def filter_queryset(self, request, queryset, view):
        return queryset.order_by(*self.get_ordering(request))

    def get_schema_operation_parameters(self, view):
        return [
            {
                'name': self.sort_param,
                'required': False,
                'in': 'query',
                'description': 'Field to sort by.',
                'schema': {'type': 'string', 'enum': list(self.sortable_fields)},
            },
            {
                'name': self.order_param,
                'required': False,
                'in': 'query',
                'description': 'Sort direction.',
                'schema': {'type': 'string', 'enum': ['asc', 'desc']},
            },
        ]


class TaskSearchFilter(BaseFilterBackend):
    """
    ``?search=<words>``. A task matches when any of the words appears as a
    whole word, case-insensitively, in its title or description.
    """
    search_param = 'search'
    search_fields = ('title', 'description')

    def get_search_terms(self, request):
        value = request.query_params.get(self.search_param, '')
        return list(dict.fromkeys(re.findall(r'\w+', value.lower())))

    @staticmethod
    def word_pattern(term, vendor):
        # postgres ARE spells word boundaries \m and \M
        if vendor == 'postgresql':
            return rf"\m{re.escape(term)}\M"
        return rf"\b{re.escape(term)}\b"

    def filter_queryset(self, request, queryset, view):
        terms = self.get_search_terms(request)
        if not terms:
            return queryset

        vendor = connections[queryset.db].vendor
        conditions = [
            Q(**{f"{field}__iregex": self.word_pattern(term, vendor)})
            for term in terms
            for field in self.search_fields
        ]
        return queryset.filter(reduce(operator.or_, conditions))

    def get_schema_operation_parameters(self, view):
        return [
            {
                'name': self.search_param,
                'required': False,
                'in': 'query',
                'description': 'Words to look for in title or description; any word matches.',
                'schema': {'type': 'string'},
            },
        ]
