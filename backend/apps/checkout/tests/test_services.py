import unittest
from decimal import Decimal
from unittest.mock import Mock

from apps.checkout.commands import CheckoutCommand
from apps.checkout.dtos import LineEntry
from apps.checkout.exceptions import (
    CheckoutServiceError,
    MalformedCartError,
    RateUnavailableError,
)

from .fakes import FakeGateway, build_service


def mug_cart(currency="USD", promo_code=None, quantity=2):
    return CheckoutCommand(
        currency=currency,
        entries=[LineEntry(name="Mug", unit_price=Decimal("10.00"), quantity=quantity)],
        promo_code=promo_code,
    )


class CheckoutServiceTests(unittest.TestCase):
    def test_same_currency_without_promo_creates_session_only(self):
        service, oracle, gateway = build_service()
        session = service.create_checkout_session(mug_cart())
        self.assertEqual(session.id, "cs_test_123")
        self.assertEqual(gateway.coupons, [])
        self.assertEqual(len(gateway.sessions), 1)
        created = gateway.sessions[0]
        self.assertEqual(created["currency"], "USD")
        self.assertIsNone(created["coupon_id"])
        item = created["line_items"][0]
        self.assertEqual(item.unit_amount_minor, 1000)
        self.assertEqual(item.quantity, 2)
        self.assertEqual(oracle.calls, [(2000, "USD", "USD")])

    def test_converted_currency_rescales_line_amounts(self):
        service, _oracle, gateway = build_service(rates={"USDEUR": "0.90"})
        service.create_checkout_session(mug_cart(currency="EUR"))
        created = gateway.sessions[0]
        self.assertEqual(created["currency"], "EUR")
        self.assertEqual(created["line_items"][0].unit_amount_minor, 900)
        self.assertEqual(created["line_items"][0].currency, "EUR")

    def test_flat_promo_creates_coupon_and_session_references_it(self):
        service, _oracle, gateway = build_service()
        session = service.create_checkout_session(mug_cart(promo_code="FLAT5"))
        self.assertEqual(gateway.coupons, [(500, "USD")])
        self.assertEqual(gateway.sessions[0]["coupon_id"], "coupon_1")
        self.assertEqual(session.coupon_id, "coupon_1")

    def test_percentage_promo_uses_converted_total(self):
        service, _oracle, gateway = build_service(rates={"USDEUR": "0.90"})
        service.create_checkout_session(mug_cart(currency="EUR", promo_code="DISCOUNT10"))
        self.assertEqual(gateway.coupons, [(180, "EUR")])

    def test_unknown_promo_creates_no_coupon(self):
        service, _oracle, gateway = build_service()
        service.create_checkout_session(mug_cart(promo_code="NOPE"))
        self.assertEqual(gateway.coupons, [])
        self.assertIsNone(gateway.sessions[0]["coupon_id"])

    def test_discount_capped_at_cart_total(self):
        service, _oracle, gateway = build_service(rules={"BIG": {"amount_minor": 5000}})
        service.create_checkout_session(mug_cart(promo_code="BIG"))
        self.assertEqual(gateway.coupons, [(2000, "USD")])

    def test_empty_cart_rejected(self):
        service, oracle, gateway = build_service()
        with self.assertRaises(MalformedCartError):
            service.create_checkout_session(CheckoutCommand(currency="USD", entries=[]))
        self.assertEqual(oracle.calls, [])
        self.assertEqual(gateway.sessions, [])

    def test_rate_failure_aborts_before_payment_calls(self):
        gateway = FakeGateway()
        service, _oracle, _ = build_service(gateway=gateway)
        service.pricing.rate_oracle = Mock()
        service.pricing.rate_oracle.convert.side_effect = RateUnavailableError("no EUR")
        with self.assertRaises(RateUnavailableError):
            service.create_checkout_session(mug_cart(currency="EUR", promo_code="FLAT5"))
        self.assertEqual(gateway.coupons, [])
        self.assertEqual(gateway.sessions, [])

    def test_coupon_failure_aborts_session_creation(self):
        gateway = Mock()
        gateway.create_coupon.side_effect = CheckoutServiceError("declined")
        service, _oracle, _ = build_service(gateway=gateway)
        with self.assertRaises(CheckoutServiceError):
            service.create_checkout_session(mug_cart(promo_code="FLAT5"))
        gateway.create_session.assert_not_called()
