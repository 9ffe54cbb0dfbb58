# astra/core/errors.py
from __future__ import annotations


class AstraError(Exception):
    """Base class for failures surfaced to the user as a chat or terminal line."""


class ConfigurationError(AstraError):
    pass


class GatewayError(AstraError):
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RateLimitError(GatewayError):
    def __init__(self, message: str = "Rate limits exceeded, please try again later."):
        super().__init__(message, status_code=429)


class PaymentRequiredError(GatewayError):
    def __init__(self, message: str = "Payment required, please add funds to your AI workspace."):
        super().__init__(message, status_code=402)


class DeployError(AstraError):
    pass


class DeployTimeoutError(DeployError):
    pass
