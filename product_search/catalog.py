"""
product_search/catalog.py
-------------------------

Load a product catalog file into ProductRecords. Flat exports (one column
per field) and nested JSON records are both accepted.
"""

import os
import re
from typing import Any, Dict, List, Optional

import pandas as pd

from product_search.logging_utils import get_logger
from product_search.models import ProductRecord

logger = get_logger("catalog")

SPEC_COLUMNS = ("cpu", "gpu", "ram", "storage")
_TAG_SEPARATORS = re.compile(r"[,|;]")


def _clean(value: Any) -> Any:
    """NaN and blank strings become None."""
    if isinstance(value, (list, tuple, dict)):
        return value
    if value is not None and not isinstance(value, str) and pd.api.types.is_list_like(value):
        # Parquet list columns come back as arrays
        return list(value)
    if value is None or pd.isna(value):
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _split_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(t).strip() for t in value if str(t).strip()]
    return [t.strip() for t in _TAG_SEPARATORS.split(str(value)) if t.strip()]


def row_to_record(row: Dict[str, Any]) -> ProductRecord:
    data = {k: _clean(v) for k, v in row.items()}

    brand = data.pop("brand", None)
    brand_name = data.pop("brand_name", None)
    if isinstance(brand, dict):
        data["brand"] = brand
    elif brand or brand_name:
        data["brand"] = {"name": str(brand or brand_name)}

    category = data.pop("category", None)
    if not data.get("category_name") and category:
        name = category.get("name") if isinstance(category, dict) else category
        if name is not None:
            data["category_name"] = str(name)

    specs = data.pop("specifications", None)
    specs = dict(specs) if isinstance(specs, dict) else {}
    for column in SPEC_COLUMNS:
        value = data.pop(column, None)
        if value is not None:
            specs[column] = str(value)
    if specs:
        data["specifications"] = specs

    data["tags"] = _split_tags(data.pop("tags", None))
    if data.get("title") is None and data.get("product_name") is not None:
        data["title"] = str(data["product_name"])
    for text_field in ("title", "description", "category_name"):
        if data.get(text_field) is not None:
            data[text_field] = str(data[text_field])

    return ProductRecord.model_validate(data)


def read_catalog_frame(path: str) -> pd.DataFrame:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Catalog file not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    try:
        if ext == ".csv":
            df = pd.read_csv(path)
        elif ext in {".parquet", ".pq"}:
            df = pd.read_parquet(path)
        elif ext == ".json":
            df = pd.read_json(path)
        elif ext in {".jsonl", ".ndjson"}:
            df = pd.read_json(path, lines=True)
        else:
            raise ValueError(f"Unsupported file type: {ext}")
    except ValueError:
        raise
    except Exception as e:
        raise ValueError(f"Failed to read file {path}: {e}") from e
    return df


def load_catalog(path: str) -> List[ProductRecord]:
    df = read_catalog_frame(path)
    # object dtype keeps None instead of NaN for missing cells
    df = df.astype(object).where(pd.notna(df), None)
    records = [row_to_record(row) for row in df.to_dict(orient="records")]
    logger.info(f"Loaded {len(records)} products from {path}")
    return records


def sample_catalog() -> List[ProductRecord]:
    """Small built-in catalog used when no catalog file is configured."""
    rows: List[Dict[str, Optional[Any]]] = [
        {"id": 1, "title": "ASUS ROG Strix RTX 4070 GPU", "brand": "ASUS", "category_name": "Graphics Cards",
         "description": "Triple-fan graphics card for 1440p gaming", "tags": "gaming,rgb", "gpu": "RTX 4070"},
        {"id": 2, "title": "MSI Gaming Laptop Katana 15", "brand": "MSI", "category_name": "Laptops",
         "description": "15.6 inch gaming laptop", "tags": "gaming,portable", "cpu": "Intel Core i7-13620H",
         "gpu": "RTX 4060", "ram": "16GB DDR5", "storage": "1TB NVMe SSD"},
        {"id": 3, "title": "Logitech G502 Gaming Mouse", "brand": "Logitech", "category_name": "Peripherals",
         "description": "Wired gaming mouse with adjustable weights", "tags": "gaming,mouse"},
        {"id": 4, "title": "Corsair Vengeance 32GB DDR5 Memory Kit", "brand": "Corsair", "category_name": "Memory",
         "description": "Dual channel desktop memory", "ram": "32GB DDR5"},
        {"id": 5, "title": "Samsung 990 Pro 2TB NVMe SSD", "brand": "Samsung", "category_name": "Storage",
         "description": "PCIe 4.0 solid state drive", "storage": "2TB NVMe SSD"},
        {"id": 6, "title": "AMD Ryzen 7 7800X3D Processor", "brand": "AMD", "category_name": "Processors",
         "description": "8-core desktop processor with 3D V-Cache", "cpu": "Ryzen 7 7800X3D"},
        {"id": 7, "title": "ASUS TUF Gaming Monitor 27", "brand": "ASUS", "category_name": "Monitors",
         "description": "27 inch 165Hz gaming monitor", "tags": "gaming,display"},
        {"id": 8, "title": "Logitech MX Keys Keyboard", "brand": "Logitech", "category_name": "Peripherals",
         "description": "Wireless illuminated keyboard", "tags": "office,wireless"},
    ]
    return [row_to_record(row) for row in rows]
