from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

PLACEHOLDER_IMAGE = "https://via.placeholder.com/600x400?text=No+Image"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 string into an aware datetime (UTC when naive).

    Returns None for missing or unparseable values.
    """
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class Product:
    id: int
    name: str = ""
    sku: str = ""
    price: int = 0
    stock: int = 0
    category: str = ""
    image: str = ""
    description: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        # raises KeyError/TypeError/ValueError on records without a usable id
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            sku=str(data.get("sku") or ""),
            price=int(data.get("price") or 0),
            stock=int(data.get("stock") or 0),
            category=str(data.get("category") or ""),
            image=str(data.get("image") or ""),
            description=str(data.get("description") or ""),
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "price": self.price,
            "stock": self.stock,
            "category": self.category,
            "image": self.image,
            "description": self.description,
            "createdAt": self.created_at,
        }

    @property
    def created(self) -> Optional[datetime]:
        return parse_timestamp(self.created_at)

    @property
    def details_url(self) -> str:
        return f"product.html?id={self.id}"


@dataclass
class CartLine:
    """One cart row. Name and price are a snapshot taken when first added."""

    id: int
    name: str
    price: int
    qty: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartLine":
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            price=int(data.get("price") or 0),
            qty=int(data.get("qty") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "price": self.price, "qty": self.qty}

    @property
    def line_total(self) -> int:
        return self.price * self.qty


def seed_products(created_at: Optional[str] = None) -> List[Product]:
    """Default catalog written when the store holds none."""
    ts = created_at or utc_now_iso()
    return [
        Product(id=1, name="Brake Pads - Performance", sku="BP-1001", price=1500, stock=120, category="brakes",
                image="https://via.placeholder.com/600x400?text=Brake+Pads",
                description="High quality front brake pads.", created_at=ts),
        Product(id=2, name="Full-Face Helmet", sku="HL-221", price=3500, stock=50, category="safety",
                image="https://via.placeholder.com/600x400?text=Helmet",
                description="Certified full-face helmet for maximum protection.", created_at=ts),
        Product(id=3, name="Chain & Sprocket Kit", sku="CK-520", price=2200, stock=8, category="engine",
                image="https://via.placeholder.com/600x400?text=Chain+Kit",
                description="Durable kit for medium bikes.", created_at=ts),
        Product(id=4, name="Engine Oil 1L", sku="EO-1L", price=900, stock=80, category="engine",
                image="https://via.placeholder.com/600x400?text=Engine+Oil",
                description="Synthetic blend oil, 1 litre.", created_at=ts),
        Product(id=5, name="Riding Gloves", sku="GL-11", price=1200, stock=15, category="safety",
                image="https://via.placeholder.com/600x400?text=Gloves",
                description="Comfortable gloves with knuckle protection.", created_at=ts),
        Product(id=6, name="Side Mirrors (Pair)", sku="SM-33", price=1800, stock=3, category="accessories",
                image="https://via.placeholder.com/600x400?text=Mirrors",
                description="Adjustable pair of mirrors.", created_at=ts),
    ]
