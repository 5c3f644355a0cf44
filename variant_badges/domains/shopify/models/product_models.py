"""
Product shapes returned by the Shopify Admin API, normalized to numeric ids
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from variant_badges.shared.helpers import normalize_shopify_id


@dataclass(frozen=True)
class SelectedOption:
    name: str
    value: str


@dataclass(frozen=True)
class ProductOption:
    name: str
    values: List[str] = field(default_factory=list)
    id: Optional[str] = None
    position: Optional[int] = None


@dataclass(frozen=True)
class ProductVariant:
    id: str
    title: Optional[str] = None
    price: Optional[str] = None
    compare_at_price: Optional[str] = None
    selected_options: List[SelectedOption] = field(default_factory=list)

    def option_value(self, option_name: str) -> Optional[str]:
        """Value of the named option on this variant, exact name match"""
        for selected in self.selected_options:
            if selected.name == option_name:
                return selected.value
        return None

    def to_dict(self) -> Dict[str, Any]:
        # option1..option3 mirror the REST variant shape the admin UI expects
        values = [selected.value for selected in self.selected_options]
        values += [None] * (3 - len(values))
        return {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "compare_at_price": self.compare_at_price,
            "option1": values[0],
            "option2": values[1],
            "option3": values[2],
            "selectedOptions": [
                {"name": s.name, "value": s.value} for s in self.selected_options
            ],
        }


@dataclass(frozen=True)
class Product:
    id: str
    title: str
    handle: Optional[str] = None
    options: List[ProductOption] = field(default_factory=list)
    variants: List[ProductVariant] = field(default_factory=list)
    images: List[Dict[str, Any]] = field(default_factory=list)

    def option(self, option_name: str) -> Optional[ProductOption]:
        for option in self.options:
            if option.name == option_name:
                return option
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "handle": self.handle,
            "options": [
                {
                    "id": option.id,
                    "name": option.name,
                    "values": list(option.values),
                    "position": option.position,
                }
                for option in self.options
            ],
            "variants": [variant.to_dict() for variant in self.variants],
            "images": list(self.images),
        }

    @classmethod
    def from_graphql(cls, node: Dict[str, Any]) -> "Product":
        """Build a Product from a GraphQL product node"""
        options = [
            ProductOption(
                id=normalize_shopify_id(option.get("id")),
                name=option.get("name", ""),
                values=list(option.get("values") or []),
                position=option.get("position"),
            )
            for option in node.get("options") or []
        ]
        variants = []
        for edge in (node.get("variants") or {}).get("edges", []):
            variant = edge.get("node") or {}
            variants.append(
                ProductVariant(
                    id=normalize_shopify_id(variant.get("id")),
                    title=variant.get("title"),
                    price=variant.get("price"),
                    compare_at_price=variant.get("compareAtPrice"),
                    selected_options=[
                        SelectedOption(name=s.get("name", ""), value=s.get("value", ""))
                        for s in variant.get("selectedOptions") or []
                    ],
                )
            )
        images = [
            {
                "id": normalize_shopify_id((edge.get("node") or {}).get("id")),
                "src": (edge.get("node") or {}).get("url"),
                "alt": (edge.get("node") or {}).get("altText"),
            }
            for edge in (node.get("images") or {}).get("edges", [])
        ]
        return cls(
            id=normalize_shopify_id(node.get("id")),
            title=node.get("title") or "",
            handle=node.get("handle"),
            options=options,
            variants=variants,
            images=images,
        )
