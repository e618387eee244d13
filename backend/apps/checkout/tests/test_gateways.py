import types
import unittest
from unittest.mock import Mock

import stripe

from apps.checkout.dtos import PricedLineItem
from apps.checkout.exceptions import CheckoutServiceError
from apps.checkout.gateways import StripeCheckoutGateway


def make_client():
    client = Mock()
    client.Coupon.create.return_value = types.SimpleNamespace(id="coupon_abc")
    client.checkout.Session.create.return_value = types.SimpleNamespace(id="cs_test_abc")
    return client


class StripeCheckoutGatewayTests(unittest.TestCase):
    def setUp(self):
        self.client = make_client()
        self.gateway = StripeCheckoutGateway(
            "sk_test_key",
            success_url="https://shop.example/success.html",
            cancel_url="https://shop.example/cancel.html",
            client=self.client,
        )
        self.items = [
            PricedLineItem(
                currency="EUR", name="Mug", unit_amount_minor=900, quantity=2, image_url="mug.png"
            ),
            PricedLineItem(currency="EUR", name="Tea", unit_amount_minor=450, quantity=1),
        ]

    def test_create_coupon_is_single_use_for_exact_amount(self):
        coupon_id = self.gateway.create_coupon(500, "USD")
        self.assertEqual(coupon_id, "coupon_abc")
        self.client.Coupon.create.assert_called_once_with(
            api_key="sk_test_key",
            amount_off=500,
            currency="usd",
            duration="once",
            max_redemptions=1,
        )

    def test_create_session_sends_line_items_and_fixed_options(self):
        session = self.gateway.create_session(self.items, "EUR")
        self.assertEqual(session.id, "cs_test_abc")
        self.assertIsNone(session.coupon_id)
        kwargs = self.client.checkout.Session.create.call_args.kwargs
        self.assertEqual(kwargs["api_key"], "sk_test_key")
        self.assertEqual(kwargs["mode"], "payment")
        self.assertEqual(kwargs["payment_method_types"], ["card"])
        self.assertEqual(kwargs["success_url"], "https://shop.example/success.html")
        self.assertEqual(kwargs["cancel_url"], "https://shop.example/cancel.html")
        self.assertEqual(kwargs["shipping_address_collection"], {"allowed_countries": ["US", "CA"]})
        self.assertEqual(kwargs["billing_address_collection"], "required")
        self.assertEqual(kwargs["discounts"], [])
        self.assertEqual(
            kwargs["line_items"][0],
            {
                "price_data": {
                    "currency": "eur",
                    "product_data": {"name": "Mug", "images": ["mug.png"]},
                    "unit_amount": 900,
                },
                "quantity": 2,
            },
        )
        self.assertNotIn("images", kwargs["line_items"][1]["price_data"]["product_data"])

    def test_create_session_references_coupon(self):
        session = self.gateway.create_session(self.items, "EUR", coupon_id="coupon_abc")
        self.assertEqual(session.coupon_id, "coupon_abc")
        kwargs = self.client.checkout.Session.create.call_args.kwargs
        self.assertEqual(kwargs["discounts"], [{"coupon": "coupon_abc"}])

    def test_coupon_failure_wrapped(self):
        self.client.Coupon.create.side_effect = stripe.StripeError("declined")
        with self.assertRaises(CheckoutServiceError):
            self.gateway.create_coupon(500, "USD")

    def test_session_failure_wrapped(self):
        self.client.checkout.Session.create.side_effect = stripe.StripeError("invalid")
        with self.assertRaises(CheckoutServiceError):
            self.gateway.create_session(self.items, "EUR")
