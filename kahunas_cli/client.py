"""Kahunas API and web client."""

import json
import logging
from typing import Any, Callable, Optional

import httpx

from kahunas_cli.config import DEFAULT_BASE_URL, DEFAULT_WEB_BASE_URL
from kahunas_cli.errors import KahunasClientError
from kahunas_cli.models import ApiResponse, WorkoutPlan
from kahunas_cli.responses import (
    extract_token,
    extract_user_uuid_from_checkins,
    is_likely_login_html,
    is_token_expired_response,
)
from kahunas_cli.workouts import build_workout_plan_index, extract_workout_plans, merge_workout_plans

logger = logging.getLogger(__name__)

# API endpoints
CHECKIN_LIST_PATH = "/api/v2/checkin/list"
WORKOUT_PROGRAM_LIST_PATH = "/api/v1/workoutprogram"
WORKOUT_PROGRAM_PATH = "/api/v1/workoutprogram/{program_id}"
GET_TOKEN_PATH = "/get-token"
CALENDAR_EVENTS_PATH = "/coach/clients/calendar/getEvent/{user_uuid}"

APP_ORIGIN = "https://kahunas.io"

__all__ = ["KahunasClient", "KahunasClientError"]


def parse_json_text(text: str) -> Optional[Any]:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None


class KahunasClient:
    """Client for the Kahunas API and the web session endpoints."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        web_base_url: str = DEFAULT_WEB_BASE_URL,
        csrf_token: Optional[str] = None,
        cookie_header: Optional[str] = None,
        on_token_refresh: Optional[Callable[[str], None]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            token: API auth token (auth-user-token header)
            base_url: API base URL
            web_base_url: Web app URL, used for /get-token and the calendar
            csrf_token: CSRF token of the web session
            cookie_header: Cookie header of the web session
            on_token_refresh: Called with the new token after a refresh
            transport: Custom httpx transport
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.web_origin = str(httpx.URL(web_base_url).join("/")).rstrip("/")
        self.csrf_token = csrf_token
        self.cookie_header = cookie_header
        self.on_token_refresh = on_token_refresh
        self._http = httpx.Client(timeout=30.0, follow_redirects=False, transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the HTTP client."""
        self._http.close()

    @property
    def can_refresh_token(self) -> bool:
        return bool(self.csrf_token and self.cookie_header)

    def _ensure_token(self) -> str:
        if not self.token:
            if not self.can_refresh_token:
                raise KahunasClientError("Auth token required. Run 'kahunas token help' for details.")
            self.refresh_token()
        return self.token

    def _api_headers(self, accept: str = "*/*") -> dict:
        return {
            "accept": accept,
            "auth-user-token": self._ensure_token(),
            "origin": APP_ORIGIN,
            "referer": f"{APP_ORIGIN}/",
        }

    def _web_headers(self) -> dict:
        return {
            "accept": "*/*",
            "cookie": self.cookie_header or "",
            "origin": self.web_origin,
            "referer": f"{self.web_origin}/dashboard",
            "x-requested-with": "XMLHttpRequest",
        }

    @staticmethod
    def _to_api_response(response: httpx.Response) -> ApiResponse:
        return ApiResponse(
            ok=response.is_success,
            status=response.status_code,
            text=response.text,
            json_data=parse_json_text(response.text),
        )

    def _send_with_refresh(self, send: Callable[[], httpx.Response]) -> ApiResponse:
        """Send a request, refreshing the token once if the API says it expired."""
        response = self._to_api_response(send())
        if is_token_expired_response(response.json_data) and self.can_refresh_token:
            logger.debug("Token expired (status %s), refreshing via %s", response.status, GET_TOKEN_PATH)
            self.refresh_token()
            response = self._to_api_response(send())
        return response

    def get_with_auth(self, path: str, params: Optional[dict] = None) -> ApiResponse:
        """GET an API path with the auth token; the response is returned as-is."""
        return self._send_with_refresh(
            lambda: self._http.get(f"{self.base_url}{path}", params=params, headers=self._api_headers())
        )

    def post_json(self, path: str, body: dict) -> ApiResponse:
        """POST a JSON body to an API path with the auth token."""
        return self._send_with_refresh(
            lambda: self._http.post(
                f"{self.base_url}{path}",
                json=body,
                headers=self._api_headers(accept="application/json"),
            )
        )

    def list_checkins(self, page: int = 1, rpp: int = 12) -> ApiResponse:
        response = self.post_json(CHECKIN_LIST_PATH, {"page": page, "rpp": rpp})
        if not response.ok:
            raise KahunasClientError(f"Failed to list check-ins: {response.status} - {response.text}")
        return response

    def discover_user_uuid(self) -> Optional[str]:
        """User uuid from the latest check-in, None when unavailable."""
        try:
            response = self.list_checkins(page=1, rpp=1)
        except (KahunasClientError, httpx.HTTPError) as e:
            logger.debug("User uuid discovery failed: %s", e)
            return None
        return extract_user_uuid_from_checkins(response.json_data)

    def list_workout_programs(self, page: int = 1, rpp: int = 12) -> ApiResponse:
        response = self.get_with_auth(WORKOUT_PROGRAM_LIST_PATH, params={"page": page, "rpp": rpp})
        if not response.ok:
            raise KahunasClientError(f"Failed to list workout programs: {response.status} - {response.text}")
        return response

    def list_workout_plans(self, rpp: int = 100) -> list[WorkoutPlan]:
        return extract_workout_plans(self.list_workout_programs(page=1, rpp=rpp).json_data)

    def fetch_workout_program(self, program_id: str) -> ApiResponse:
        """Fetch a single workout program by uuid."""
        params = {"csrf_kahunas_token": self.csrf_token} if self.csrf_token else None
        response = self.get_with_auth(WORKOUT_PROGRAM_PATH.format(program_id=program_id), params=params)
        if not response.ok:
            raise KahunasClientError(
                f"Failed to get workout program {program_id}: {response.status} - {response.text}"
            )
        return response

    def fetch_auth_token(self) -> str:
        """
        Exchange the web session for an API token via /get-token.

        Returns:
            The auth token

        Raises:
            KahunasClientError: If the session is missing, rejected or returns no token
        """
        if not self.can_refresh_token:
            raise KahunasClientError(
                "Web session required to fetch a token. Set KAHUNAS_CSRF_TOKEN and KAHUNAS_AUTH_COOKIE."
            )
        response = self._http.get(
            f"{self.web_origin}{GET_TOKEN_PATH}",
            params={"csrf_kahunas_token": self.csrf_token},
            headers=self._web_headers(),
        )
        if not response.is_success:
            raise KahunasClientError(f"Failed to get auth token: {response.status_code} - {response.text}")
        if is_likely_login_html(response.text):
            raise KahunasClientError("Web session expired. Log in again and update your cookies.")

        token = extract_token(response.text)
        if not token:
            raise KahunasClientError("No auth token found in /get-token response.")
        return token

    def refresh_token(self) -> str:
        self.token = self.fetch_auth_token()
        if self.on_token_refresh:
            self.on_token_refresh(self.token)
        return self.token

    def fetch_calendar_events(self, user_uuid: str, time_zone: str) -> ApiResponse:
        """
        Fetch the user's calendar events from the web app.

        Args:
            user_uuid: Kahunas user uuid
            time_zone: IANA time zone the calendar is rendered in

        Returns:
            The raw calendar response; json_data is the event list
        """
        if not self.csrf_token or not self.cookie_header:
            raise KahunasClientError("Missing CSRF token or cookies. Run 'kahunas token help' for details.")

        response = self._http.post(
            f"{self.web_origin}{CALENDAR_EVENTS_PATH.format(user_uuid=user_uuid)}",
            params={"timezone": time_zone},
            data={"csrf_kahunas_token": self.csrf_token, "filter": ""},
            headers={
                **self._web_headers(),
                "content-type": "application/x-www-form-urlencoded; charset=UTF-8",
            },
        )
        if not response.is_success:
            raise KahunasClientError(f"Failed to get calendar events: {response.status_code} - {response.text}")
        if is_likely_login_html(response.text):
            raise KahunasClientError("Web session expired. Log in again and update your cookies.")
        return self._to_api_response(response)

    def build_program_details(
        self,
        events: list[dict],
        cached_plans: Optional[list[WorkoutPlan]] = None,
    ) -> dict[str, Any]:
        """
        Fetch the program payload of every distinct program referenced by events.

        Program fetches are best-effort: on failure the entry falls back to the
        matching plan from the program list (or None).

        Args:
            events: Calendar events
            cached_plans: Plans from the local workout cache

        Returns:
            Dict mapping program uuid to its workout_plan payload
        """
        plans = list(cached_plans or [])
        try:
            plans = merge_workout_plans(self.list_workout_plans(rpp=100), plans)
        except (KahunasClientError, httpx.HTTPError) as e:
            logger.debug("Program list unavailable: %s", e)
        plan_index = build_workout_plan_index(plans)

        program_ids = []
        for entry in events:
            program_id = entry.get("program") if isinstance(entry, dict) else None
            if isinstance(program_id, str) and program_id and program_id not in program_ids:
                program_ids.append(program_id)

        details: dict[str, Any] = {}
        for program_id in program_ids:
            try:
                payload = self.fetch_workout_program(program_id).json_data
            except (KahunasClientError, httpx.HTTPError) as e:
                logger.debug("Program %s unavailable: %s", program_id, e)
                payload = None

            if isinstance(payload, dict):
                data = payload.get("data")
                plan = data.get("workout_plan") if isinstance(data, dict) else None
                details[program_id] = plan if plan else payload
                continue

            fallback = plan_index.get(program_id)
            details[program_id] = fallback.model_dump(mode="json") if fallback else None
        return details
