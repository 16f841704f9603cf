"""
Admin API views.

Protected by ``AdminSecretMiddleware``; requests reaching these views
already carried the right ``X-Admin-Secret`` header.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.admin.serializers import StatisticsResponseSerializer
from api.v1.dependencies import get_container
from sales.application.queries.get_statistics import GetStatisticsQuery


class StatisticsView(APIView):
    """View for the sales overview."""

    @extend_schema(
        operation_id="get_statistics",
        summary="Get Statistics",
        description=(
            "Sales counters (all-time and today), order/license/payment "
            "totals and the most recent orders, newest first."
        ),
        tags=["Admin API"],
        parameters=[
            OpenApiParameter(
                name="X-Admin-Secret",
                type=str,
                location=OpenApiParameter.HEADER,
                required=True,
                description="Shared admin secret",
            ),
        ],
        responses={
            200: StatisticsResponseSerializer,
            401: {"description": "Missing admin secret"},
            403: {"description": "Invalid admin secret"},
        },
    )
    def get(self, request: Request) -> Response:
        handler = get_container().get_statistics_handler()
        result = async_to_sync(handler.handle)(GetStatisticsQuery())
        return Response(StatisticsResponseSerializer(result).data)
