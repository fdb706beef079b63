"""
Pagination for conversation history.

Conversation history uses fixed-size page-number pagination: the page
size is not client-configurable and the service applies the offset, so
this class only parses the page number and shapes the response.

Response shape:
    {"page": 1, "page_size": 25, "count": 25, "has_more": true, "results": [...]}

count is the number of items on this page; has_more is count == page_size.
"""

from rest_framework.pagination import BasePagination
from rest_framework.response import Response

from messaging.constants import MESSAGE_CONFIG
from messaging.services import normalize_page


class MessagePagePagination(BasePagination):
    """
    Page-number pagination for message lists.

    Orders messages newest-first (applied by MessageService.list_between).

    Default: 25 messages per page (fixed)

    Query parameters:
        page: 1-indexed page number; missing, invalid or < 1 means 1
    """

    page_size = MESSAGE_CONFIG.PAGE_SIZE
    page_query_param = "page"

    def __init__(self):
        self.page = 1

    def get_page_number(self, request) -> int:
        """Read and normalize the page number from the query string."""
        self.page = normalize_page(request.query_params.get(self.page_query_param, 1))
        return self.page

    def get_paginated_response(self, data):
        count = len(data)
        return Response(
            {
                "page": self.page,
                "page_size": self.page_size,
                "count": count,
                "has_more": count == self.page_size,
                "results": data,
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "required": ["page", "page_size", "count", "has_more", "results"],
            "properties": {
                "page": {"type": "integer", "example": 1},
                "page_size": {"type": "integer", "example": self.page_size},
                "count": {"type": "integer", "example": self.page_size},
                "has_more": {"type": "boolean"},
                "results": schema,
            },
        }
