# catalog_search/utils.py
"""
Catalog loading utilities.

The data layer serves catalogs as JSON documents shaped like:

    {
      "categories": [{"id": "c1", "name": "Hot Beverages", "emoji": "..."}],
      "items": [{"id": "i1", "categoryId": "c1", "title": "Latte",
                 "description": "...", "price": 180, "currency": "INR",
                 "tags": ["bestseller"], "isAvailable": true}]
    }

Both camelCase (as served) and snake_case keys are accepted.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

from .models import CatalogCategory, CatalogItem

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class CatalogFormatError(ValueError):
    """Raised when a catalog row cannot be turned into an item or category."""


def _pick(row: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return default


def category_from_dict(row: Mapping[str, Any]) -> CatalogCategory:
    """
    Build a CatalogCategory from a mapping.

    Raises:
        CatalogFormatError: if ``id`` or ``name`` is missing.
    """
    cat_id = _pick(row, "id", "_id")
    name = _pick(row, "name")
    if cat_id is None or name is None:
        raise CatalogFormatError(f"Category needs id and name: {dict(row)!r}")
    return CatalogCategory(id=str(cat_id), name=str(name), emoji=_pick(row, "emoji"))


def item_from_dict(row: Mapping[str, Any]) -> CatalogItem:
    """
    Build a CatalogItem from a mapping.

    Args:
        row: dict with at least id and a non-empty title.

    Returns:
        CatalogItem

    Raises:
        CatalogFormatError: if id or title is missing or empty.
    """
    item_id = _pick(row, "id", "_id")
    title = _pick(row, "title")
    if item_id is None or not str(title or "").strip():
        raise CatalogFormatError(f"Item needs id and a non-empty title: {dict(row)!r}")

    tags = _pick(row, "tags", default=()) or ()
    # A bare string is one tag, not a sequence of letters
    if isinstance(tags, str):
        tags = (tags,)
    description = _pick(row, "description")
    return CatalogItem(
        id=str(item_id),
        category_id=str(_pick(row, "categoryId", "category_id", default="")),
        title=str(title),
        description=None if description is None else str(description),
        price=float(_pick(row, "price", default=0.0)),
        currency=str(_pick(row, "currency", default="")),
        tags=tuple(str(t) for t in tags),
        is_available=bool(_pick(row, "isAvailable", "is_available", default=True)),
        image_url=_pick(row, "imageUrl", "image_url"),
    )


def _convert_rows(rows: Sequence[Mapping[str, Any]], convert, strict: bool) -> List[Any]:
    out = []
    for row in rows:
        try:
            out.append(convert(row))
        except (CatalogFormatError, TypeError, ValueError) as e:
            if strict:
                raise
            logger.warning("Skipping malformed catalog row: %s", e)
    return out


def catalog_from_dict(
    data: Mapping[str, Any], strict: bool = True
) -> Tuple[Tuple[CatalogItem, ...], Tuple[CatalogCategory, ...]]:
    """
    Convert a catalog document into item and category tuples.

    Args:
        data: mapping with optional "items" and "categories" lists.
        strict: raise on malformed rows (True) or log and skip them (False).

    Returns:
        (items, categories)
    """
    categories = _convert_rows(data.get("categories") or [], category_from_dict, strict)
    items = _convert_rows(data.get("items") or [], item_from_dict, strict)
    return tuple(items), tuple(categories)


def load_catalog(
    path: Union[str, Path], strict: bool = True
) -> Tuple[Tuple[CatalogItem, ...], Tuple[CatalogCategory, ...]]:
    """
    Load a catalog JSON file.

    Args:
        path: location of the JSON document.
        strict: see :func:`catalog_from_dict`.

    Returns:
        (items, categories)

    Raises:
        CatalogFormatError: if the document is not a JSON object, or a row is
            malformed and ``strict`` is set.
    """
    with open(Path(path), "r", encoding="utf-8") as f:
        data: Dict[str, Any] = json.load(f)
    if not isinstance(data, dict):
        raise CatalogFormatError(f"Catalog root must be an object, got {type(data).__name__}")
    items, categories = catalog_from_dict(data, strict=strict)
    logger.info("Loaded %d items in %d categories from %s", len(items), len(categories), path)
    return items, categories
