class CheckoutError(Exception):
    """Base class for failures raised while building a checkout session."""


class MalformedCartError(CheckoutError):
    """Raised when the cart cannot be priced as submitted."""


class ZeroTotalError(MalformedCartError):
    """Raised when the cart's base-currency total is zero, so no rescale is possible."""


class RateLookupError(CheckoutError):
    """Base class for exchange-rate lookup failures."""


class RateUnavailableError(RateLookupError):
    """Raised when the provider answers but has no usable rate for the pair."""


class RateProviderError(RateLookupError):
    """Raised when the provider cannot be reached or answers with garbage."""


class CheckoutServiceError(CheckoutError):
    """Raised when the payment processor rejects coupon or session creation."""
