"""
API views for coins.

URL Structure:
    /api/v1/coins/balance/          GET   Current balance
    /api/v1/coins/buy/              POST  Start a purchase (Stripe Checkout)
    /api/v1/coins/verify/?id=<id>   GET   Credit a paid purchase
    /api/v1/coins/webhook/          POST  Stripe webhook (payments.webhooks)

The buyer lands on FRONTEND_URL/coins/verify?id=<purchase id> after the
Stripe page; the frontend then calls the verify endpoint. The webhook
completes the same purchase if the buyer never comes back.
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from payments.serializers import (
    BalanceSerializer,
    BuyCoinsSerializer,
    PurchaseStartedSerializer,
    PurchaseVerifiedSerializer,
)
from payments.services import CoinService
from payments.services.coin_service import ERROR_CODES

ERROR_STATUS = {
    ERROR_CODES.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
    ERROR_CODES.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ERROR_CODES.PURCHASE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ERROR_CODES.PAYMENT_NOT_COMPLETED: status.HTTP_402_PAYMENT_REQUIRED,
    ERROR_CODES.PAYMENT_GATEWAY_ERROR: status.HTTP_502_BAD_GATEWAY,
}


def failure_response(result) -> Response:
    return Response(
        result.to_response(),
        status=ERROR_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST),
    )


class BalanceView(APIView):
    """GET /api/v1/coins/balance/"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_coin_balance",
        summary="Get coin balance",
        responses={200: BalanceSerializer},
        tags=["Coins"],
    )
    def get(self, request):
        coins = CoinService.get_balance(request.user.id)
        return Response(BalanceSerializer({"coins": coins}).data)


class BuyCoinsView(APIView):
    """POST /api/v1/coins/buy/"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="buy_coins",
        summary="Start a coin purchase",
        description=(
            "Creates a pending purchase and a Stripe Checkout Session. Redirect "
            "the buyer to checkout_url; coins are credited once the payment is "
            "verified."
        ),
        request=BuyCoinsSerializer,
        responses={
            201: OpenApiResponse(response=PurchaseStartedSerializer),
            400: OpenApiResponse(description="Coin amount out of range"),
            502: OpenApiResponse(description="Stripe unavailable"),
        },
        tags=["Coins"],
    )
    def post(self, request):
        serializer = BuyCoinsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = CoinService.start_purchase(
            request.user, serializer.validated_data["coins"]
        )
        if not result.success:
            return failure_response(result)

        return Response(
            PurchaseStartedSerializer(result.data).data,
            status=status.HTTP_201_CREATED,
        )


class VerifyPurchaseView(APIView):
    """GET /api/v1/coins/verify/?id=<purchase id>"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="verify_coin_purchase",
        summary="Verify a coin purchase",
        description=(
            "Checks the purchase with Stripe and credits the coins if it was "
            "paid. Calling it again for a completed purchase changes nothing."
        ),
        parameters=[
            OpenApiParameter(
                name="id",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=True,
                description="Purchase id from the return URL",
            ),
        ],
        responses={
            200: OpenApiResponse(response=PurchaseVerifiedSerializer),
            400: OpenApiResponse(description="Missing or malformed id"),
            402: OpenApiResponse(description="Payment not completed"),
            404: OpenApiResponse(description="Purchase not found"),
            502: OpenApiResponse(description="Stripe unavailable"),
        },
        tags=["Coins"],
    )
    def get(self, request):
        result = CoinService.complete_purchase(
            request.query_params.get("id", ""), user=request.user
        )
        if not result.success:
            return failure_response(result)

        balance = CoinService.get_balance(request.user.id)
        return Response(
            PurchaseVerifiedSerializer(result.data, context={"balance": balance}).data
        )
