"""
Shop API views.

These endpoints are used by buyers to:
- Browse the catalog
- Place, pay and cancel orders
- Look up an order by id or email
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.dependencies import get_container
from api.v1.shop.serializers import (
    CatalogResponseSerializer,
    ConfirmPaymentRequestSerializer,
    CreateOrderRequestSerializer,
    FindOrderRequestSerializer,
    FindOrderResponseSerializer,
    OrderSerializer,
    PaymentConfirmationSerializer,
)
from orders.application.commands.cancel_order import CancelOrderCommand
from orders.application.commands.confirm_payment import ConfirmPaymentCommand
from orders.application.commands.create_order import CreateOrderCommand
from orders.application.queries.find_order import FindOrderQuery
from orders.domain.payment import PaymentEvidence

ERROR_RESPONSE = {"description": "Error envelope: {error: {code, message, details}}"}


class CatalogView(APIView):
    """View listing tiers and payment methods."""

    @extend_schema(
        operation_id="get_catalog",
        summary="Get Catalog",
        description="List the purchasable tiers and the accepted payment methods.",
        tags=["Shop API"],
        responses={200: CatalogResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        catalog = get_container().catalog
        serializer = CatalogResponseSerializer(
            {"tiers": catalog.tiers(), "payment_methods": catalog.payment_methods()}
        )
        return Response(serializer.data)


class CreateOrderView(APIView):
    """View for creating orders."""

    @extend_schema(
        operation_id="create_order",
        summary="Create Order",
        description=(
            "Open a pending order for a tier. The price is taken from the "
            "catalog at this moment and does not change afterwards."
        ),
        tags=["Shop API"],
        request=CreateOrderRequestSerializer,
        responses={201: OrderSerializer, 400: ERROR_RESPONSE},
    )
    def post(self, request: Request) -> Response:
        """Create a pending order."""
        serializer = CreateOrderRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        extra = {name: data[name] for name in ("qq", "note") if data.get(name)}
        command = CreateOrderCommand(
            tier_code=data["tier"],
            email=data["email"],
            payment_method=data["payment_method"],
            extra=extra,
        )
        handler = get_container().create_order_handler()
        result = async_to_sync(handler.handle)(command)

        return Response(OrderSerializer(result).data, status=status.HTTP_201_CREATED)


class ConfirmPaymentView(APIView):
    """View for confirming the simulated payment of an order."""

    @extend_schema(
        operation_id="confirm_payment",
        summary="Confirm Payment",
        description=(
            "Mark a pending order as paid and issue its license. Missing "
            "evidence fields default to a generated transaction id, the "
            "order email and the order price."
        ),
        tags=["Shop API"],
        request=ConfirmPaymentRequestSerializer,
        responses={
            200: PaymentConfirmationSerializer,
            404: ERROR_RESPONSE,
            409: ERROR_RESPONSE,
        },
    )
    def post(self, request: Request, order_id: str) -> Response:
        """Confirm payment for an order."""
        serializer = ConfirmPaymentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        command = ConfirmPaymentCommand(
            order_id=order_id,
            evidence=PaymentEvidence(**serializer.validated_data),
        )
        handler = get_container().confirm_payment_handler()
        result = async_to_sync(handler.handle)(command)

        return Response(PaymentConfirmationSerializer(result).data)


class CancelOrderView(APIView):
    """View for cancelling a pending order."""

    @extend_schema(
        operation_id="cancel_order",
        summary="Cancel Order",
        description="Cancel a pending order. Cancelling twice is allowed.",
        tags=["Shop API"],
        request=None,
        responses={200: OrderSerializer, 404: ERROR_RESPONSE, 409: ERROR_RESPONSE},
    )
    def post(self, request: Request, order_id: str) -> Response:
        handler = get_container().cancel_order_handler()
        result = async_to_sync(handler.handle)(CancelOrderCommand(order_id=order_id))
        return Response(OrderSerializer(result).data)


class FindOrderView(APIView):
    """View for looking up an order."""

    @extend_schema(
        operation_id="find_order",
        summary="Find Order",
        description=(
            "Find an order by exact id, or else the most recent order "
            "placed with the given email. Returns null when nothing matches."
        ),
        tags=["Shop API"],
        request=FindOrderRequestSerializer,
        responses={200: FindOrderResponseSerializer, 400: ERROR_RESPONSE},
    )
    def post(self, request: Request) -> Response:
        serializer = FindOrderRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        query = FindOrderQuery(
            order_id=data.get("order_id") or None,
            email=data.get("email") or None,
        )
        handler = get_container().find_order_handler()
        result = async_to_sync(handler.handle)(query)

        return Response(FindOrderResponseSerializer({"order": result}).data)
