from decimal import Decimal

from rest_framework import serializers


class CheckoutItemSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=250)
    price = serializers.DecimalField(max_digits=None, decimal_places=None, min_value=Decimal("0"))
    quantity = serializers.IntegerField(min_value=1)
    image = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=2048)


class CheckoutSessionRequestSerializer(serializers.Serializer):
    items = CheckoutItemSerializer(many=True, allow_empty=False)
    promoCode = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=64, trim_whitespace=False
    )
    currency = serializers.RegexField(
        r"^[A-Za-z]{3}$",
        required=False,
        allow_blank=True,
        allow_null=True,
        error_messages={"invalid": "Currency must be a three-letter ISO 4217 code."},
    )


class CheckoutSessionResponseSerializer(serializers.Serializer):
    id = serializers.CharField()
