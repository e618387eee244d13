from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import OpenApiResponse, extend_schema

from apps.api.schemas import ErrorResponseSerializer
from apps.api.exceptions import ApplicationError
from apps.common import get_logger
from .commands import CheckoutCommand
from .config import CheckoutConfig
from .container import build_checkout_service
from .exceptions import MalformedCartError
from .serializers import (
    CheckoutSessionRequestSerializer,
    CheckoutSessionResponseSerializer,
)

logger = get_logger(__name__).bind(component="checkout", layer="view")


class CheckoutSessionView(APIView):
    config = CheckoutConfig.from_settings()
    service = build_checkout_service(config)
    log = logger.bind(view="CheckoutSessionView")

    @extend_schema(
        summary="Create checkout session",
        description=(
            "Aggregates the cart by item name, converts its total from the base currency into the "
            "requested currency, applies an optional promo code and opens a hosted payment "
            "checkout session. Any upstream failure yields a plain-text 500."
        ),
        request=CheckoutSessionRequestSerializer,
        responses={
            200: CheckoutSessionResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            500: OpenApiResponse(description="Internal Server Error (plain text)"),
        },
    )
    def post(self, request):
        serializer = CheckoutSessionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = CheckoutCommand.from_validated(
            serializer.validated_data, default_currency=self.config.default_currency
        )
        self.log.debug("Received checkout request", **command.as_log_context())
        try:
            session = self.service.create_checkout_session(command)
        except MalformedCartError as exc:
            self.log.info("Rejected malformed cart", error=str(exc))
            raise ApplicationError(
                "VALIDATION_ERROR", str(exc), details={"items": [str(exc)]}
            ) from exc
        return Response(CheckoutSessionResponseSerializer({"id": session.id}).data)
