"""
License API views.

These endpoints are used by the licensed software to:
- Validate a key for a device
- Activate a key on a device (consumes an activation slot)
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.dependencies import get_container
from api.v1.licenses.serializers import LicenseCheckRequestSerializer, LicenseViewSerializer
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.queries.validate_license import ValidateLicenseQuery

ERROR_RESPONSES = {
    400: {"description": "Bad Request"},
    403: {"description": "License banned or device not authorized"},
    404: {"description": "License key not found"},
    410: {"description": "License expired"},
    422: {"description": "Activation limit reached"},
}


class ValidateLicenseView(APIView):
    """View for validating a license key."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Check that a key is usable on a device. Checks run in order: "
            "existence, ban, expiry, activation limit, device binding. "
            "Validation never consumes an activation slot."
        ),
        tags=["License API"],
        request=LicenseCheckRequestSerializer,
        responses={200: LicenseViewSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        serializer = LicenseCheckRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        query = ValidateLicenseQuery(
            license_key=serializer.validated_data["key"],
            device_id=serializer.validated_data["device_id"],
        )
        handler = get_container().validate_license_handler()
        result = async_to_sync(handler.handle)(query)

        return Response(LicenseViewSerializer(result).data)


class ActivateLicenseView(APIView):
    """View for activating a license on a device."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Bind a device to a license. Re-activating an already bound "
            "device is idempotent and does not consume another slot."
        ),
        tags=["License API"],
        request=LicenseCheckRequestSerializer,
        responses={200: LicenseViewSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        serializer = LicenseCheckRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        command = ActivateLicenseCommand(
            license_key=serializer.validated_data["key"],
            device_id=serializer.validated_data["device_id"],
        )
        handler = get_container().activate_license_handler()
        result = async_to_sync(handler.handle)(command)

        return Response(LicenseViewSerializer(result).data)
