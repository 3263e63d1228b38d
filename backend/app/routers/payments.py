import logging

from fastapi import APIRouter, Depends, HTTPException

from app.config import settings
from app.dependencies import get_pricing_service, require_business_user
from app.routers.pricing import quote_to_response
from app.schemas.pricing import CaptureResponse, OrderResponse, QuoteRequest
from app.services.payment_service import PaymentError, PayPalGateway, format_amount, get_payment_gateway
from app.services.pricing_service import PricingService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/payments",
    tags=["payments"],
    dependencies=[Depends(require_business_user)],
)


@router.post("/order", response_model=OrderResponse)
def create_order(
    req: QuoteRequest,
    pricing: PricingService = Depends(get_pricing_service),
    gateway: PayPalGateway = Depends(get_payment_gateway),
):
    amount = pricing.calculate_job_posting_price(req.plan, req.addons)
    quote = pricing.quote(req.plan, req.addons)
    if quote.total != amount:
        # Prices can be refreshed between the two lookups; the charge amount wins
        logger.error(
            "Quote total %s differs from charge amount %s for plan %r",
            format_amount(quote.total),
            format_amount(amount),
            req.plan,
        )
    for code, price in quote.addon_prices.items():
        if price == 0:
            logger.warning("Add-on %r priced at 0 for order on plan %r", code, req.plan)

    details = quote_to_response(quote)
    # Only the basic plan is free; it never reaches the payment provider
    if req.plan == "basic" and amount == 0:
        return OrderResponse(free_product=True, amount=format_amount(amount), currency=settings.currency, plan_details=details)

    try:
        order = gateway.create_order(amount)
    except PaymentError as exc:
        logger.error("Payment order creation failed: %s", exc)
        raise HTTPException(status_code=502, detail="Failed to create payment order")
    return OrderResponse(
        order_id=order["order_id"],
        status=order["status"],
        amount=format_amount(amount),
        currency=settings.currency,
        plan_details=details,
    )


@router.post("/order/{order_id}/capture", response_model=CaptureResponse)
def capture_order(order_id: str, gateway: PayPalGateway = Depends(get_payment_gateway)):
    try:
        return CaptureResponse(**gateway.capture_order(order_id))
    except PaymentError as exc:
        logger.error("Payment capture failed for %s: %s", order_id, exc)
        raise HTTPException(status_code=502, detail="Failed to capture payment order")
