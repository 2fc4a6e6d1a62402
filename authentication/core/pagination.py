from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from .response import standardized_response


class StandardPagination(PageNumberPagination):
    """Page-number pagination wrapped in the standard response envelope"""
    page_size = 12
    page_size_query_param = 'page_size'
    max_page_size = 100

    def get_paginated_data(self, data):
        return {
            'count': self.page.paginator.count,
            'num_pages': self.page.paginator.num_pages,
            'page': self.page.number,
            'next': self.get_next_link(),
            'previous': self.get_previous_link(),
            'results': data,
        }

    def get_paginated_response(self, data, **extra):
        payload = self.get_paginated_data(data)
        payload.update(extra)
        return Response(standardized_response(data=payload))


class AdminPagination(StandardPagination):
    """Pagination for admin panel lists"""
    page_size = 25
