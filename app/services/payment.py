import logging
import random
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from sqlmodel import Session

from app.core.exceptions import NotFoundError
from app.db.storage import Storage
from app.models.order import OrderStatus
from app.models.payment import PaymentMethod, PaymentResult

logger = logging.getLogger(__name__)

def make_transaction_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{random.randint(0, 999)}"

class PaymentService:
    """Simulated payment processing.

    No gateway is contacted. Credit card, boleto and PIX payments always
    succeed once the required fields are present, and a fake transaction id
    is handed back.
    """

    def __init__(self, session: Session):
        self.storage = Storage(session)

    def get_all_methods(self) -> List[PaymentMethod]:
        return self.storage.get_all_payment_methods()

    def get_method(self, method_id: int) -> PaymentMethod:
        method = self.storage.get_payment_method(method_id)
        if not method:
            raise NotFoundError("Payment method", method_id)
        return method

    def get_method_by_code(self, code: str) -> PaymentMethod:
        method = self.storage.get_payment_method_by_code(code)
        if not method:
            raise NotFoundError("Payment method", code)
        return method

    def process_payment(self, order_id: int, method_code: str, details: Optional[Dict[str, Any]] = None) -> PaymentResult:
        order = self.storage.get_order(order_id)
        if not order:
            raise NotFoundError("Order", order_id)
        method = self.get_method_by_code(method_code)

        details = details or {}
        if not method.is_active:
            result = PaymentResult(success=False, message="Payment method not supported")
        elif method_code == "credit":
            result = self._credit(details)
        elif method_code == "boleto":
            result = self._boleto(order_id)
        elif method_code == "pix":
            result = self._pix(order_id)
        else:
            result = PaymentResult(success=False, message="Payment method not supported")

        if result.success:
            self.storage.update_order_status(order_id, OrderStatus.PAID)
            self.storage.commit()
            logger.info(f"Payment {result.transaction_id} accepted for order {order_id}")
        else:
            logger.warning(f"Payment for order {order_id} with '{method_code}' rejected: {result.message}")

        return result

    def _credit(self, details: Dict[str, Any]) -> PaymentResult:
        card_number = str(details.get("card_number") or "")
        if not card_number:
            return PaymentResult(success=False, message="Credit card details were not provided")

        return PaymentResult(
            success=True,
            transaction_id=make_transaction_id("CC"),
            message="Credit card payment processed successfully",
            details={
                "last4": card_number[-4:],
                "card_type": "Visa",  # simulated
            },
        )

    def _boleto(self, order_id: int) -> PaymentResult:
        return PaymentResult(
            success=True,
            transaction_id=make_transaction_id("BOL"),
            message="Boleto generated successfully",
            details={
                "boleto_url": f"https://example.com/boleto/{order_id}",
                "boleto_number": f"34191.79001 01043.510047 91020.150008 9 {random.randint(0, 9999)}",
                "expiration_date": (datetime.now(timezone.utc) + timedelta(days=3)).isoformat(),
            },
        )

    def _pix(self, order_id: int) -> PaymentResult:
        return PaymentResult(
            success=True,
            transaction_id=make_transaction_id("PIX"),
            message="PIX charge generated successfully",
            details={
                "pix_key": f"{order_id}{random.randint(0, 999999)}",
                "pix_qr_code_url": f"https://example.com/pix-qrcode/{order_id}",
                "expiration_date": (datetime.now(timezone.utc) + timedelta(minutes=30)).isoformat(),
            },
        )
