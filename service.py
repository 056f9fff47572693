"""
Coffee shop service layer.

``CoffeeShopService`` validates input, runs the MongoDB operations and turns
driver results into ``CoffeeShop`` / ``Product`` models. It knows nothing about
HTTP; failures are raised as the exceptions in ``errors`` and mapped to
responses by the app.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Union

import pydantic
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from database import create_document, get_documents, sanitize, to_obj_id
from errors import NotFoundError, StorageError, ValidationError
from schemas import CoffeeShop, CoffeeShopCreate, Product

logger = logging.getLogger(__name__)


def name_filter(term: Optional[str]) -> Dict[str, Any]:
    """Case-insensitive literal substring filter on ``name``.

    Regex metacharacters in ``term`` are escaped so ``".*"`` only matches
    names that contain a dot followed by an asterisk.
    """
    return {"name": {"$regex": re.escape(term or ""), "$options": "i"}}


def _validation_error(exc: pydantic.ValidationError) -> ValidationError:
    errors = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return ValidationError("Invalid coffee shop", errors)


class CoffeeShopService:
    def __init__(self, collection):
        self.collection = collection

    async def create(self, shop_input: Union[CoffeeShopCreate, Mapping[str, Any]]) -> CoffeeShop:
        if not isinstance(shop_input, CoffeeShopCreate):
            try:
                shop_input = CoffeeShopCreate.model_validate(shop_input)
            except pydantic.ValidationError as exc:
                error = _validation_error(exc)
                logger.warning("Rejected coffee shop: %s", error.errors)
                raise error from exc
        try:
            doc = await create_document(self.collection, shop_input)
        except PyMongoError as exc:
            logger.error("Error saving coffee shop %r: %s", shop_input.name, exc)
            raise StorageError(f"Error saving coffee shop: {exc}") from exc
        logger.info("Created coffee shop %s", doc["_id"])
        return CoffeeShop(**sanitize(doc))

    async def list(self) -> List[CoffeeShop]:
        try:
            docs = await get_documents(self.collection)
        except PyMongoError as exc:
            logger.error("Error fetching coffee shops: %s", exc)
            raise StorageError(f"Error fetching coffee shops: {exc}") from exc
        return [CoffeeShop(**sanitize(doc)) for doc in docs]

    async def search_by_name(self, term: Optional[str]) -> List[CoffeeShop]:
        try:
            docs = await get_documents(self.collection, name_filter(term))
        except PyMongoError as exc:
            logger.error("Error searching coffee shops for %r: %s", term, exc)
            raise StorageError(f"Error searching coffee shops: {exc}") from exc
        return [CoffeeShop(**sanitize(doc)) for doc in docs]

    async def get_by_id(self, shop_id: str) -> CoffeeShop:
        doc = await self._find(shop_id, "Error fetching coffee shop by ID")
        return CoffeeShop(**sanitize(doc))

    async def toggle_favorite(self, shop_id: str, favorite: bool) -> CoffeeShop:
        oid = to_obj_id(shop_id)
        if oid is None:
            logger.warning("Toggle favorite: malformed coffee shop id %r", shop_id)
            raise NotFoundError()
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": {"favorite": favorite}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            logger.error("Error toggling favorite for coffee shop %s: %s", shop_id, exc)
            raise StorageError(f"Error toggling favorite: {exc}") from exc
        if doc is None:
            logger.warning("Toggle favorite: coffee shop %s not found", shop_id)
            raise NotFoundError()
        return CoffeeShop(**sanitize(doc))

    async def get_products_by_category(self, shop_id: str, category: str) -> List[Product]:
        doc = await self._find(shop_id, f"Error fetching {category} products")
        # exact, case-sensitive match; unknown categories simply match nothing
        return [
            Product(**product)
            for product in doc.get("products", [])
            if product.get("category") == category
        ]

    async def _find(self, shop_id: str, context: str) -> Dict[str, Any]:
        oid = to_obj_id(shop_id)
        if oid is None:
            logger.warning("%s: malformed coffee shop id %r", context, shop_id)
            raise NotFoundError()
        try:
            doc = await self.collection.find_one({"_id": oid})
        except PyMongoError as exc:
            logger.error("%s %s: %s", context, shop_id, exc)
            raise StorageError(f"{context}: {exc}") from exc
        if doc is None:
            logger.warning("%s: coffee shop %s not found", context, shop_id)
            raise NotFoundError()
        return doc
