"""HTTP client for the risk API, used by the live tracker on a device."""

import logging

import httpx

from shelytics.config import settings
from shelytics.schemas.incident import SOSResponse
from shelytics.schemas.risk import RiskCheckResponse, RiskLevel, RiskZoneSchema

logger = logging.getLogger(__name__)


class RiskClient:
    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds

    async def fetch_zones(self) -> list[RiskZoneSchema]:
        """All zones known to the server; [] when the server can't be reached."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(f"{self.base_url}/zones/")
                resp.raise_for_status()
                zones = [RiskZoneSchema.model_validate(z) for z in resp.json()]
                logger.info("Fetched %d risk zones", len(zones))
                return zones
        except Exception as e:
            logger.warning("Risk zone fetch failed: %s", e)
            return []

    async def check_risk(
        self, latitude: float, longitude: float, user_id: str | None = None,
    ) -> RiskCheckResponse:
        payload = {"latitude": latitude, "longitude": longitude}
        if user_id:
            payload["userId"] = user_id
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(f"{self.base_url}/risk/check", json=payload)
            resp.raise_for_status()
            return RiskCheckResponse.model_validate(resp.json())

    async def send_sos(
        self,
        user_id: str,
        latitude: float,
        longitude: float,
        user_name: str | None = None,
        risk_level: RiskLevel = RiskLevel.SAFE,
    ) -> SOSResponse:
        payload = {
            "userId": user_id,
            "latitude": latitude,
            "longitude": longitude,
            "userName": user_name,
            "riskLevel": risk_level.value,
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(f"{self.base_url}/sos", json=payload)
            resp.raise_for_status()
            return SOSResponse.model_validate(resp.json())
