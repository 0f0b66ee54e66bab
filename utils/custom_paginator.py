import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.settings import api_settings


class CustomPaginator(PageNumberPagination):
    """
    1-indexed page/limit pagination that never errors: non-numeric values fall
    back to the defaults, values below 1 are raised to 1 and a page past the
    end yields an empty list.
    """
    page_size = api_settings.PAGE_SIZE or 10
    page_query_param = 'page'
    page_size_query_param = 'limit'
    max_page_size = 100

    @staticmethod
    def _positive_int(raw, default):
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return default
        return max(value, 1)

    def get_page_size(self, request):
        size = self._positive_int(request.query_params.get(self.page_size_query_param), self.page_size)
        return min(size, self.max_page_size)

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.limit = self.get_page_size(request)
        self.page_number = self._positive_int(request.query_params.get(self.page_query_param), 1)
        self.total = queryset.count()

        offset = (self.page_number - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response(self, data):
        return Response({
            'success': True,
            'count': len(data),
            'total': self.total,
            'page': self.page_number,
            'pages': math.ceil(self.total / self.limit),
            'data': data,
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'required': ['success', 'count', 'total', 'page', 'pages', 'data'],
            'properties': {
                'success': {'type': 'boolean', 'example': True},
                'count': {'type': 'integer', 'example': 10},
                'total': {'type': 'integer', 'example': 42},
                'page': {'type': 'integer', 'example': 1},
                'pages': {'type': 'integer', 'example': 5},
                'data': schema,
            },
        }
