"""Routes for listing, creating, updating and deleting products."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status

from src.errors import (
    InvalidBodyError,
    InvalidIdError,
    InvalidInputError,
    ProductNotFoundError,
    StorageError,
)
from src.models.product import MessageResponse, Product
from src.services.storage.product_store import ProductStore, get_product_store
from src.services.validation import validate_product_input

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

StoreDependency = Annotated[ProductStore, Depends(get_product_store)]

_ID_PATTERN = re.compile(r"[0-9]+")


def _parse_product_id(raw_id: str) -> int:
    """Return the positive integer id carried by the path, or raise ``InvalidIdError``."""

    if not _ID_PATTERN.fullmatch(raw_id):
        raise InvalidIdError()
    product_id = int(raw_id)
    if product_id <= 0:
        raise InvalidIdError()
    return product_id


async def _read_json_body(request: Request) -> dict[str, Any]:
    """Decode the request body as a JSON object; an empty body counts as ``{}``."""

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise InvalidBodyError() from error
    if not isinstance(body, dict):
        raise InvalidBodyError()
    return body


def _is_product(record: Any, product_id: int) -> bool:
    if not isinstance(record, dict):
        return False
    value = record.get("id")
    return not isinstance(value, bool) and value == product_id


def _load_products(store: ProductStore) -> list[Any]:
    try:
        return store.load()
    except OSError as error:
        logger.exception("Failed to read products from %s", store.path)
        raise StorageError("Failed to read products", error) from error


@router.get(
    "",
    response_model=None,
    summary="List every product",
)
async def list_products(store: StoreDependency) -> list[Any]:
    """Return the stored records exactly as they appear in the file."""

    return await asyncio.to_thread(_load_products, store)


@router.get(
    "/instock",
    response_model=None,
    summary="List products that are in stock",
)
async def list_in_stock_products(store: StoreDependency) -> list[Any]:
    records = await asyncio.to_thread(_load_products, store)
    # only a real JSON true counts; 1 or "yes" do not
    return [
        record
        for record in records
        if isinstance(record, dict) and record.get("inStock") is True
    ]


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(request: Request, store: StoreDependency) -> Product:
    """Validate a complete body, assign the next id and persist the new product."""

    body = await _read_json_body(request)
    errors = validate_product_input(body, partial=False)
    if errors:
        raise InvalidInputError(errors)

    def _create() -> Product:
        with store.lock:
            products = store.load()
            product = Product(
                id=store.next_id(products),
                name=body["name"].strip(),
                price=body["price"],
                in_stock=body["inStock"],
            )
            products.append(product.to_record())
            store.save(products)
            return product

    try:
        product = await asyncio.to_thread(_create)
    except OSError as error:
        logger.exception("Failed to save new product")
        raise StorageError("Failed to save product", error) from error

    logger.info("Created product %s", product.id, extra={"product_name": product.name})
    return product


@router.put(
    "/{product_id}",
    response_model=None,
    summary="Update some or all fields of a product",
)
async def update_product(
    product_id: str,
    request: Request,
    store: StoreDependency,
) -> dict[str, Any]:
    """Merge the supplied fields onto an existing product and persist it.

    Fields absent from the body keep their current values. ``name`` is
    trimmed again after the merge.
    """

    parsed_id = _parse_product_id(product_id)
    body = await _read_json_body(request)
    errors = validate_product_input(body, partial=True)
    if errors:
        raise InvalidInputError(errors)

    def _update() -> dict[str, Any] | None:
        with store.lock:
            products = store.load()
            index = next(
                (i for i, product in enumerate(products) if _is_product(product, parsed_id)),
                None,
            )
            if index is None:
                return None

            updated = {**products[index], **body}
            if isinstance(updated.get("name"), str):
                updated["name"] = updated["name"].strip()
            products[index] = updated
            store.save(products)
            return updated

    try:
        updated = await asyncio.to_thread(_update)
    except OSError as error:
        logger.exception("Failed to update product %s", parsed_id)
        raise StorageError("Failed to update product", error) from error

    if updated is None:
        raise ProductNotFoundError(parsed_id)

    logger.info("Updated product %s", parsed_id, extra={"fields": sorted(body)})
    return updated


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    summary="Delete a product",
)
async def delete_product(product_id: str, store: StoreDependency) -> MessageResponse:
    parsed_id = _parse_product_id(product_id)

    def _delete() -> bool:
        with store.lock:
            products = store.load()
            remaining = [
                product for product in products if not _is_product(product, parsed_id)
            ]
            if len(remaining) == len(products):
                return False
            store.save(remaining)
            return True

    try:
        removed = await asyncio.to_thread(_delete)
    except OSError as error:
        logger.exception("Failed to delete product %s", parsed_id)
        raise StorageError("Failed to delete product", error) from error

    if not removed:
        raise ProductNotFoundError(parsed_id)

    logger.info("Deleted product %s", parsed_id)
    return MessageResponse(message="Product deleted successfully")
