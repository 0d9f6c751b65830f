"""Resource definitions for the Shopify admin API"""
from .relationships import HasOne, IncludesMany, IncludesOne
from .resource import Resource

__all__ = [
    "Product",
    "Variant",
    "Image",
    "CustomCollection",
    "Collect",
    "Theme",
    "Asset",
]


class Product(Resource):
    path = "products"
    name = "product"
    name_plural = "products"

    variants = IncludesMany("Variant")
    images = IncludesMany("Image")


class Variant(Resource):
    """a product variant, nested under its product"""

    path = "variants"
    name = "variant"
    name_plural = "variants"

    product = IncludesOne(Product)


class Image(Resource):
    path = "images"
    name = "image"
    name_plural = "images"


class CustomCollection(Resource):
    path = "custom_collections"
    name = "custom_collection"
    name_plural = "custom_collections"


class Collect(Resource):
    """links a product to a custom collection"""

    path = "collects"
    name = "collect"
    name_plural = "collects"

    product = IncludesOne(Product)
    collection = IncludesOne(CustomCollection, key="collection_id")


class Theme(Resource):
    path = "themes"
    name = "theme"
    name_plural = "themes"

    assets = IncludesMany("Asset")


class Asset(Resource):
    path = "assets"
    name = "asset"
    name_plural = "assets"

    theme = HasOne(Theme, params=lambda: {"role": "main"})
