from decimal import Decimal

import pytest
import requests

from app.data.seed import seed, DEFAULT_PRODUCTS
from app.domain.errors import TransientStoreError, NotFoundError
from app.services import product_client
from app.services.catalog import DbCatalog, ProductService, get_catalog
from app.services.product_client import ProductClient


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture
def fake_get(monkeypatch):
    calls = []
    responses = []

    def _get(url, timeout):
        calls.append(url)
        outcome = responses[min(len(calls), len(responses)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(product_client.requests, "get", _get)
    return calls, responses


class TestProductClient:
    def test_price_from_product_service(self, fake_get):
        calls, responses = fake_get
        responses.append(FakeResponse(200, {"id": 2, "name": "Mouse", "price": 49.5}))

        price = ProductClient(base_url="http://catalog/").get_price(2)

        assert price == Decimal("49.50")
        assert calls == ["http://catalog/products/2"]

    def test_missing_product_is_none_without_retry(self, fake_get):
        calls, responses = fake_get
        responses.append(FakeResponse(404))

        assert ProductClient(base_url="http://catalog").get_price(7) is None
        assert len(calls) == 1

    def test_connection_errors_retried_then_transient(self, fake_get):
        calls, responses = fake_get
        responses.append(requests.ConnectionError("refused"))

        with pytest.raises(TransientStoreError):
            ProductClient(base_url="http://catalog").get_price(1)

        assert len(calls) == 3

    def test_recovers_after_one_timeout(self, fake_get):
        calls, responses = fake_get
        responses.extend([requests.Timeout("slow"), FakeResponse(200, {"price": "3.10"})])

        assert ProductClient(base_url="http://catalog").get_price(1) == Decimal("3.10")
        assert len(calls) == 2

    def test_server_error_not_retried(self, fake_get):
        calls, responses = fake_get
        responses.append(FakeResponse(500))

        with pytest.raises(TransientStoreError):
            ProductClient(base_url="http://catalog").get_price(1)

        assert len(calls) == 1


class TestDbCatalog:
    def test_known_and_unknown_product(self, db, make_product):
        product_id = make_product("19.99")
        catalog = DbCatalog(db)

        assert catalog.get_price(product_id) == Decimal("19.99")
        assert catalog.get_price(product_id + 1) is None
        db.rollback()

    def test_backend_selection(self, db):
        assert isinstance(get_catalog(db, "db"), DbCatalog)
        assert isinstance(get_catalog(db, "http"), ProductClient)


class TestProductService:
    def test_list_and_get(self, db):
        assert seed(db) == len(DEFAULT_PRODUCTS)
        service = ProductService(db)

        products = service.list_products()

        assert [p["name"] for p in products] == [name for name, _ in DEFAULT_PRODUCTS]
        assert service.get_product(products[1]["id"])["price"] == Decimal("49.50")

    def test_missing_product(self, db):
        with pytest.raises(NotFoundError):
            ProductService(db).get_product(1)

    def test_seed_only_when_empty(self, db):
        assert seed(db) == len(DEFAULT_PRODUCTS)
        assert seed(db) == 0
