from sqlalchemy.orm import Session

from app.models.product import Product


class ProductRepository:
    """Read access to the plan/add-on catalog."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Product]:
        return self.db.query(Product).order_by(Product.sort_order, Product.code).all()

    def list_active(self, product_type: str | None = None) -> list[Product]:
        query = self.db.query(Product).filter(Product.active.is_(True))
        if product_type:
            query = query.filter(Product.type == product_type)
        return query.order_by(Product.sort_order, Product.code).all()

    def find_active(self, code: str, product_type: str) -> Product | None:
        return (
            self.db.query(Product)
            .filter(Product.code == code, Product.type == product_type, Product.active.is_(True))
            .first()
        )

    def find(self, code: str, product_type: str) -> Product | None:
        return (
            self.db.query(Product)
            .filter(Product.code == code, Product.type == product_type)
            .first()
        )

    def count(self) -> int:
        return self.db.query(Product).count()

    def add(self, product: Product) -> Product:
        self.db.add(product)
        return product
