from fastapi import APIRouter, Depends

from app.config import settings
from app.dependencies import get_pricing_service
from app.schemas.pricing import QuoteRequest, QuoteResponse
from app.services.pricing_service import PriceQuote, PricingService

router = APIRouter(prefix="/pricing", tags=["pricing"])


def quote_to_response(quote: PriceQuote) -> QuoteResponse:
    return QuoteResponse(
        plan=quote.plan,
        plan_price=float(quote.plan_price),
        addon_prices={code: float(price) for code, price in quote.addon_prices.items()},
        total=float(quote.total),
        currency=settings.currency,
    )


@router.get("")
async def get_pricing(pricing: PricingService = Depends(get_pricing_service)):
    return pricing.catalog()


@router.post("/quote", response_model=QuoteResponse)
async def quote_job_posting(req: QuoteRequest, pricing: PricingService = Depends(get_pricing_service)):
    return quote_to_response(pricing.quote(req.plan, req.addons))
