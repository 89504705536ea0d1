import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from holidayseo.errors import UpstreamError
from holidayseo.models.product import Product

logger = logging.getLogger(__name__)

TIMEOUT = 10  # seconds


class TourApiClient:
    """Read-only client for the third-party tour inventory API.

    Only product details are needed here; the SEO resolver uses them as a
    fallback when a tour has not been cached by the booking backend yet.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    async def get_product_details(self, product_id: str, currency: str = "GBP") -> Product:
        """Fetch one product from ``/activity.json/{id}``.

        Raises:
            UpstreamError: when the client is not configured or the payload
                is not a valid product.
            httpx.HTTPError: on network or HTTP errors.
        """
        if not self.configured:
            raise UpstreamError("Tour API base URL is not configured.")

        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-Api-Key"] = self.api_key

        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=TIMEOUT, transport=self._transport
        ) as client:
            response = await client.get(
                f"/activity.json/{product_id}", params={"currency": currency}, headers=headers
            )
            response.raise_for_status()

        try:
            product = Product.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise UpstreamError(f"Invalid product payload for {product_id}: {exc}") from exc

        logger.info("Tour API: fetched product %s (%s)", product_id, currency)
        return product
