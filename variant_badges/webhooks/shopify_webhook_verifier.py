"""
Shopify Webhook Signature Verification for security and authenticity.

Webhooks are signed with HMAC-SHA256 over the raw body (base64 in the
X-Shopify-Hmac-Sha256 header). OAuth redirects carry a hex HMAC over the
sorted query parameters. Both use the app's API secret.
"""

import base64
import hashlib
import hmac
from typing import Mapping, Optional

from variant_badges.core.logging import get_logger

logger = get_logger(__name__)


class ShopifyWebhookVerifier:
    """HMAC-SHA256 verification of Shopify webhooks and OAuth callbacks"""

    def __init__(self, api_secret: str):
        self.api_secret = api_secret

    def _calculate_signature(self, payload: bytes) -> str:
        """
        Calculate expected HMAC-SHA256 signature

        Args:
            payload: Raw request body

        Returns:
            Base64-encoded signature
        """
        signature = hmac.new(
            self.api_secret.encode("utf-8"), payload, hashlib.sha256
        ).digest()
        return base64.b64encode(signature).decode("utf-8")

    def verify_webhook_signature(
        self, payload: bytes, signature: Optional[str], shop_domain: Optional[str] = None
    ) -> bool:
        """
        Verify a webhook body against its X-Shopify-Hmac-Sha256 header.
        """
        if not signature or not self.api_secret:
            logger.warning("Webhook signature missing", shop_domain=shop_domain)
            return False

        expected_signature = self._calculate_signature(payload)
        verified = hmac.compare_digest(signature, expected_signature)
        if not verified:
            logger.warning("Webhook failed HMAC", shop_domain=shop_domain)
        return verified

    def calculate_query_signature(self, params: Mapping[str, str]) -> str:
        message = "&".join(
            f"{key}={value}"
            for key, value in sorted(params.items())
            if key not in ("hmac", "signature")
        )
        return hmac.new(
            self.api_secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
        ).hexdigest()

    def verify_query_signature(self, params: Mapping[str, str]) -> bool:
        """Verify the hmac parameter of an OAuth redirect"""
        signature = params.get("hmac")
        if not signature or not self.api_secret:
            return False
        return hmac.compare_digest(signature, self.calculate_query_signature(params))
