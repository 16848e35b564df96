import pytest

from product_search.catalog import sample_catalog
from product_search.history import SearchHistory
from product_search.models import ProductRecord
from product_search.storage import MemoryStorage


@pytest.fixture
def small_catalog():
    return [
        ProductRecord(id=1, title="ASUS ROG Strix GPU"),
        ProductRecord(id=2, title="MSI Gaming Laptop"),
        ProductRecord(id=3, title="Logitech Mouse"),
    ]


@pytest.fixture
def pc_catalog():
    return sample_catalog()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def history(storage):
    return SearchHistory(storage)
