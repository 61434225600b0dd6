# app/services/product_client.py
from decimal import Decimal

import requests
from requests import RequestException

from app.domain.errors import TransientStoreError
from app.domain.pricing import to_money
from app.utils.retry import http_retry
from app.utils.settings import PRODUCT_SERVICE_URL
from app.utils.logging import get_logger

logger = get_logger(__name__)


class ProductClient:
    """Katalog w zewnetrznym product-service (GET /products/{id})."""

    def __init__(self, base_url: str | None = None, timeout: int = 2):
        self.base_url = (base_url or PRODUCT_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def fetch_product(self, product_id: int) -> dict | None:
        url = f"{self.base_url}/products/{product_id}"
        logger.info(f"ProductClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    def get_price(self, product_id: int) -> Decimal | None:
        try:
            pdata = self.fetch_product(product_id)
        except RequestException as e:
            logger.error(f"product-service niedostepny: {type(e).__name__}")
            raise TransientStoreError("Katalog produktow chwilowo niedostepny") from e

        if pdata is None:
            return None
        return to_money(pdata["price"])
