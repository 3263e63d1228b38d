from pydantic import BaseModel, Field


class QuoteRequest(BaseModel):
    plan: str = Field(min_length=1)
    addons: list[str] = []


class QuoteResponse(BaseModel):
    plan: str
    plan_price: float
    addon_prices: dict[str, float]
    total: float
    currency: str


class OrderResponse(BaseModel):
    free_product: bool = False
    order_id: str | None = None
    status: str | None = None
    amount: str
    currency: str
    plan_details: QuoteResponse


class CaptureResponse(BaseModel):
    order_id: str
    status: str
