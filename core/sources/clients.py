"""HTTP clients for the upstream data sources (Gmail, Google Calendar, Open-Meteo)."""

from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional

import httpx

from core.sources.activity_sim import WeatherConditions

GOOGLE_API_BASE = "https://www.googleapis.com"
OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"


class GoogleWorkspaceClient:
    """Read-only Gmail/Calendar access with an already-issued bearer token."""

    def __init__(
        self,
        access_token: str,
        base_url: str = GOOGLE_API_BASE,
        client: Optional[httpx.Client] = None,
        timeout: float = 15,
    ):
        if not access_token:
            raise RuntimeError("Google access token not configured")
        self.base_url = base_url.rstrip("/")
        self.headers = {"Authorization": f"Bearer {access_token}"}
        self.client = client or httpx.Client(timeout=timeout)

    def _get(self, path: str, params: Optional[Dict] = None) -> Dict:
        response = self.client.get(f"{self.base_url}{path}", params=params, headers=self.headers)
        response.raise_for_status()
        return response.json()

    def list_messages(self, query: str, max_results: int) -> List[Dict]:
        payload = self._get(
            "/gmail/v1/users/me/messages",
            params={"q": query, "maxResults": max_results},
        )
        return payload.get("messages") or []

    def get_message_metadata(self, message_id: str) -> Dict:
        return self._get(
            f"/gmail/v1/users/me/messages/{message_id}",
            params={"format": "metadata", "metadataHeaders": "Subject"},
        )

    def list_events(self, time_min: dt.datetime, time_max: dt.datetime) -> List[Dict]:
        payload = self._get(
            "/calendar/v3/calendars/primary/events",
            params={
                "timeMin": time_min.isoformat(),
                "timeMax": time_max.isoformat(),
                "singleEvents": "true",
                "orderBy": "startTime",
            },
        )
        return payload.get("items") or []


class OpenMeteoClient:
    def __init__(self, url: str = OPEN_METEO_URL, client: Optional[httpx.Client] = None, timeout: float = 10):
        self.url = url
        self.client = client or httpx.Client(timeout=timeout)

    def current_conditions(self, latitude: float, longitude: float, timezone: str) -> WeatherConditions:
        response = self.client.get(
            self.url,
            params={
                "latitude": latitude,
                "longitude": longitude,
                "current": "temperature_2m,relative_humidity_2m,wind_speed_10m",
                "daily": "sunrise,sunset",
                "timezone": timezone,
            },
        )
        response.raise_for_status()
        return parse_conditions(response.json())


def parse_conditions(payload: Dict) -> WeatherConditions:
    """Build WeatherConditions from an Open-Meteo forecast response."""
    current = payload["current"]
    daylight = None
    daily = payload.get("daily") or {}
    if daily.get("sunrise") and daily.get("sunset"):
        sunrise = dt.datetime.fromisoformat(daily["sunrise"][0])
        sunset = dt.datetime.fromisoformat(daily["sunset"][0])
        daylight = round((sunset - sunrise).total_seconds() / 3600, 1)
    return WeatherConditions(
        temperature=float(current["temperature_2m"]),
        humidity=float(current["relative_humidity_2m"]),
        wind_speed=float(current["wind_speed_10m"]),
        daylight_hours=daylight,
    )
