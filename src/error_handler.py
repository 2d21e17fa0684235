"""Error handling helpers for the payments API."""
from typing import Any, Dict
import logging

from src.integrations.errors import PaymentError

logger = logging.getLogger(__name__)


class ErrorHandler:
    def handle_payment_error(self, exc: PaymentError, context: Dict[str, Any] = None) -> Dict[str, Any]:
        if exc.status_code >= 500:
            logger.error("Payment request failed: %s (context=%s)", exc, context or {})
        else:
            logger.info("Payment request rejected: %s", exc)
        return exc.to_dict()

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error("Unhandled exception in payments API: %s (context=%s)", exc, context or {}, exc_info=True)
        return {"error": "An internal error occurred while processing your payment. Please try again later."}
