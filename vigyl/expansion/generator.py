"""
Prospect generator client.

Asks an OpenAI-compatible chat completions gateway for new prospects in a
vertical, forcing a `deliver_prospects` tool call so the answer comes back
as structured JSON.
"""

import json
import logging
import os
import re
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..models import ProspectRecord, UserLocale

logger = logging.getLogger(__name__)


class GeneratorError(Exception):
    """Base exception for prospect generator failures."""
    pass


class AuthenticationError(GeneratorError):
    """Invalid or missing API key."""
    pass


class RateLimitError(GeneratorError):
    """Gateway rate limit or credit limit reached."""
    pass


class MalformedResponseError(GeneratorError):
    """Gateway answered without usable prospect data."""
    pass


@dataclass
class GenerationRequest:
    """Everything the generator needs to produce prospects for one vertical."""

    vertical_id: str
    vertical_name: str
    sector_name: str
    scope: str
    locale: UserLocale
    hints: List[str] = field(default_factory=list)  # Example entities
    avoid: List[str] = field(default_factory=list)  # Company names already held


class ProspectGenerator:
    """Interface for the external prospect generator."""

    async def generate(self, request: GenerationRequest) -> List[ProspectRecord]:
        raise NotImplementedError

    async def aclose(self) -> None:
        pass


class GeneratedLocation(BaseModel):
    city: str = ""
    state: str = ""
    country: str = ""


class GeneratedProspect(BaseModel):
    """One prospect as delivered by the gateway tool call."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = ""
    company_name: str = Field(alias="companyName")
    industry_id: str = Field(default="", alias="industryId")
    industry_name: Optional[str] = Field(default=None, alias="industryName")
    score: Optional[float] = Field(default=None, alias="vigylScore")
    why_now: Optional[str] = Field(default=None, alias="whyNow")
    website_url: Optional[str] = Field(default=None, alias="websiteUrl")
    employee_count: Optional[int] = Field(default=None, alias="employeeCount")
    annual_revenue: Optional[str] = Field(default=None, alias="annualRevenue")
    location: GeneratedLocation = Field(default_factory=GeneratedLocation)

    @field_validator("employee_count", mode="before")
    @classmethod
    def _whole_employees(cls, value):
        if isinstance(value, float):
            return round(value)
        return value


DELIVER_PROSPECTS_TOOL = {
    "type": "function",
    "function": {
        "name": "deliver_prospects",
        "description": "Deliver the expanded prospect list",
        "parameters": {
            "type": "object",
            "properties": {
                "prospects": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "id": {"type": "string"},
                            "companyName": {"type": "string"},
                            "industryId": {"type": "string"},
                            "industryName": {"type": "string"},
                            "vigylScore": {"type": "number"},
                            "whyNow": {"type": "string"},
                            "decisionMakers": {
                                "type": "array",
                                "items": {
                                    "type": "object",
                                    "properties": {
                                        "name": {"type": "string"},
                                        "title": {"type": "string"},
                                        "linkedinUrl": {"type": "string"},
                                        "verified": {"type": "boolean"},
                                    },
                                    "required": ["name", "title", "linkedinUrl", "verified"],
                                },
                            },
                            "recommendedServices": {
                                "type": "array",
                                "items": {
                                    "type": "object",
                                    "properties": {
                                        "service": {"type": "string"},
                                        "rationale": {"type": "string"},
                                    },
                                    "required": ["service", "rationale"],
                                },
                            },
                            "location": {
                                "type": "object",
                                "properties": {
                                    "city": {"type": "string"},
                                    "state": {"type": "string"},
                                    "country": {"type": "string"},
                                },
                                "required": ["city", "state", "country"],
                            },
                            "annualRevenue": {"type": "string"},
                            "employeeCount": {"type": "integer"},
                            "websiteUrl": {"type": "string"},
                            "competitors": {
                                "type": "array",
                                "items": {
                                    "type": "object",
                                    "properties": {
                                        "name": {"type": "string"},
                                        "description": {"type": "string"},
                                    },
                                    "required": ["name", "description"],
                                },
                            },
                        },
                        "required": [
                            "id", "companyName", "industryId", "industryName",
                            "vigylScore", "whyNow", "decisionMakers", "location",
                            "annualRevenue", "employeeCount",
                        ],
                    },
                },
            },
            "required": ["prospects"],
        },
    },
}


def scope_instructions(scope: str, locale: UserLocale) -> str:
    """Geographic instructions for the prompt."""
    city = locale.city or "the user's city"
    region = locale.region or "the user's state"
    location = ", ".join(p for p in (locale.city, locale.region, locale.country) if p) or "United States"

    instructions = {
        "local": (
            f"Generate ONLY companies near {city}, {region} "
            f"(within ~{locale.local_radius} miles)."
        ),
        "national": (
            f"Generate ONLY companies in {locale.country or 'the United States'} but OUTSIDE "
            f"{region} and its immediate neighbors. Spread across diverse states."
        ),
        "international": (
            f"Generate ONLY companies OUTSIDE {locale.country or 'the United States'}. "
            "Include companies from the UK, Germany, Japan, Canada, Australia, France, "
            "Singapore, Brazil, India, etc."
        ),
        "all": (
            f"Generate a MIX: ~4 local (near {location}), ~4 national (other states), "
            "~4 international (outside the country)."
        ),
    }
    return instructions.get(scope, instructions["all"])


def build_messages(request: GenerationRequest, max_hints: int = 6) -> List[dict]:
    """Build the chat messages for a generation request."""
    today = date.today().isoformat()
    location = ", ".join(
        p for p in (request.locale.city, request.locale.region, request.locale.country) if p
    ) or "United States"
    avoid = ", ".join(request.avoid) or "none"
    hints = ", ".join(request.hints[:max_hints]) or request.vertical_name

    system = (
        "You are an elite B2B market intelligence analyst specializing in the "
        f"{request.vertical_name} industry ({request.sector_name}). You know the companies "
        "in this space globally, from Fortune 500 leaders to fast-growing challengers. "
        f"Today is {today}."
    )

    user = f"""Generate 10-14 high-quality prospect companies in the "{request.vertical_name}" vertical.

User location: {location}

GEOGRAPHIC SCOPE:
{scope_instructions(request.scope, request.locale)}

RULES:
1. DO NOT include these companies (already in pipeline): {avoid}
2. Companies similar to: {hints} - but DIFFERENT specific companies
3. Mix company sizes: enterprise ($1B+), mid-market ($50M-$1B), growth-stage ($5M-$50M)
4. Every company must be a REAL company that operates in {request.vertical_name}
5. Each company needs a specific "Why Now" sales trigger, 3-4 decision makers,
   2-3 recommended services, 2-3 competitors and a website URL
6. For decision makers, use LinkedIn SEARCH URLs, not profile URLs
7. Industry ID for all prospects: "{request.vertical_id}"
8. Give every prospect a full location (city, state, country)"""

    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


class GatewayGenerator(ProspectGenerator):
    """
    Prospect generator backed by a chat completions gateway.

    Usage:
        async with GatewayGenerator(api_key="...") as generator:
            records = await generator.generate(request)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: str = "https://ai.gateway.lovable.dev/v1/chat/completions",
        model: str = "openai/gpt-5-mini",
        timeout: int = 120,
        max_hints: int = 6,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the generator.

        Args:
            api_key: Gateway API key (falls back to VIGYL_GENERATOR_KEY / LOVABLE_API_KEY)
            url: Chat completions endpoint
            model: Model name sent to the gateway
            timeout: Request timeout in seconds
            max_hints: Maximum example entities included in the prompt
            client: Pre-built HTTP client (mainly for tests)
        """
        if not api_key:
            api_key = os.environ.get("VIGYL_GENERATOR_KEY") or os.environ.get("LOVABLE_API_KEY")

        if not api_key:
            raise AuthenticationError(
                "Generator API key not configured. "
                "Set VIGYL_GENERATOR_KEY environment variable or pass api_key parameter."
            )

        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self.max_hints = max_hints
        self._client = client or httpx.AsyncClient(timeout=self.timeout)

        logger.debug("Gateway generator initialized (url=%s, model=%s)", url, model)

    @classmethod
    def from_settings(cls, settings, client: Optional[httpx.AsyncClient] = None) -> "GatewayGenerator":
        return cls(
            api_key=settings.generator_api_key,
            url=settings.generator_url,
            model=settings.generator_model,
            timeout=settings.generator_timeout,
            max_hints=settings.max_example_hints,
            client=client,
        )

    async def generate(self, request: GenerationRequest) -> List[ProspectRecord]:
        """
        Generate prospects for a vertical.

        One attempt only; failures raise a GeneratorError subclass.
        """
        payload = {
            "model": self.model,
            "messages": build_messages(request, self.max_hints),
            "tools": [DELIVER_PROSPECTS_TOOL],
            "tool_choice": {"type": "function", "function": {"name": "deliver_prospects"}},
        }

        logger.info(
            "Generating prospects for vertical '%s' (scope=%s)",
            request.vertical_name,
            request.scope,
        )

        try:
            response = await self._client.post(
                self.url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.TimeoutException as e:
            raise GeneratorError(f"Generator timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise GeneratorError(f"Generator request failed: {e}") from e

        self._handle_errors(response)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError("Generator returned invalid JSON") from e

        items = self._extract_prospects(data)
        records = self._parse_prospects(items, request)

        logger.info("Generator returned %d prospects", len(records))
        return records

    def _handle_errors(self, response: httpx.Response) -> None:
        """Handle gateway error responses."""
        if response.status_code in (401, 403):
            raise AuthenticationError("Invalid generator API key")
        elif response.status_code in (402, 429):
            raise RateLimitError("Generator rate or credit limit reached, try again later")
        elif response.status_code >= 500:
            raise GeneratorError(f"Generator server error: {response.status_code}")
        elif response.status_code >= 400:
            try:
                error_data = response.json()
                error_msg = error_data.get("error", response.text)
                if isinstance(error_msg, dict):
                    error_msg = error_msg.get("message", response.text)
            except ValueError:
                error_msg = response.text
            raise GeneratorError(f"Generator error: {error_msg}")

    def _extract_prospects(self, data: dict) -> list:
        """Pull the prospects array from a tool call, or from JSON in the content."""
        try:
            message = data["choices"][0]["message"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError("Generator response has no message") from e

        tool_calls = message.get("tool_calls") or []
        arguments = None
        if tool_calls:
            arguments = (tool_calls[0].get("function") or {}).get("arguments")

        if not arguments:
            content = message.get("content") or ""
            match = re.search(r"\{[\s\S]*\}", content)
            if not match:
                raise MalformedResponseError("Generator response contained no prospects")
            arguments = match.group(0)

        try:
            parsed = json.loads(arguments)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Could not parse generator output: {e}") from e

        prospects = parsed.get("prospects", []) if isinstance(parsed, dict) else []
        if not isinstance(prospects, list):
            raise MalformedResponseError("Generator 'prospects' is not a list")
        return prospects

    def _parse_prospects(self, items: list, request: GenerationRequest) -> List[ProspectRecord]:
        """Validate gateway items and convert them to records."""
        records = []
        last_error = None
        for item in items:
            try:
                prospect = GeneratedProspect.model_validate(item)
            except ValidationError as e:
                # One bad item does not fail the batch
                last_error = e
                logger.warning("Skipping invalid prospect from generator: %s", e)
                continue

            data = prospect.model_dump()
            data["id"] = data.get("id") or f"exp-{request.vertical_id}-{uuid.uuid4().hex[:8]}"
            data["industry_id"] = data.get("industry_id") or request.vertical_id
            records.append(ProspectRecord.from_dict(data))
            logger.debug("Parsed generated prospect: %s", prospect.company_name)

        if items and not records:
            raise MalformedResponseError(f"Invalid prospect from generator: {last_error}") from last_error

        return records

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()
