"""
AI suggestions — powered by Gemini.

Two entry points:
- analyze_project(): free-text description -> suggested screens, complexity,
  technologies, platforms.
- analyze_document(): requirements document text -> stage-hours breakdown,
  scaled by team experience and platform overhead, plus features/risks.

The AI only *suggests*. suggestion_to_patch() maps a suggestion onto a draft
merge-patch; the configuration's own validation is the only gate before the
estimation engine runs. Unparseable AI output falls back to a fixed,
clearly-flagged default analysis instead of failing.
"""

import json
import logging
import math
import re
import urllib.error
import urllib.request
from datetime import datetime

from .calculators.base import round_half_away
from .calculators.tables import EXPERIENCE_MULTIPLIERS, HOURLY_RATES
from .config import settings
from .enums import Complexity, ExperienceLevel, Platform, Stage
from .exceptions import AIRateLimitError, AIServiceError
from .schemas import DocumentAnalysis, ProjectAnalysis, StageBreakdown, TechnologySuggestion

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_CHARS = 10
MAX_DOCUMENT_CHARS = 200_000

# Overhead when a document's scope targets a platform. The largest one wins.
PLATFORM_OVERHEAD = {
    Platform.WEB: 1.0,
    Platform.ANDROID: 1.15,
    Platform.IOS: 1.2,
    Platform.LINUX_SERVER: 1.1,
    Platform.CROSS_PLATFORM: 1.35,
}

BREAKDOWN_RATES = {
    "pm": HOURLY_RATES[Stage.PM],
    "design": HOURLY_RATES[Stage.DESIGN],
    "frontend": HOURLY_RATES[Stage.FRONTEND],
    "backend": HOURLY_RATES[Stage.BACKEND],
    "qa": HOURLY_RATES[Stage.QA],
    "devops": HOURLY_RATES[Stage.DEPLOY],
}

PROJECT_PROMPT = """You are an expert IT project analyst. Analyze the project description and provide structured recommendations.

Based on the description, analyze and suggest:
1. Recommended technologies (frontend, backend, database, cloud)
2. Complexity level (simple, medium, complex)
3. Estimated number of unique screens/pages
4. Key features to consider
5. Potential challenges
6. Suggested team experience level (junior, mid, senior, lead, architect)

Return your analysis as a JSON object with this exact structure:
{"technologies":{"frontend":[],"backend":[],"database":[],"cloud":[]},"complexity":"medium","suggested_screens":15,"key_features":[],"challenges":[],"recommended_experience":"mid","platforms":["web"],"estimated_weeks":12,"summary":""}

Only return valid JSON, no markdown or explanation."""

DOCUMENT_PROMPT = """You are an expert IT project estimator. Analyze the project document and produce a precise, conservative estimate.

Estimation baseline:
- Screens: simple 6-8 h, medium 12-20 h, complex 24-40 h
- API endpoints: simple CRUD 4-6 h, with business logic 8-12 h, integrations 16-24 h each
- Authentication 24-40 h, payments 32-48 h, real-time 24-40 h, search 12-24 h, reporting 24-48 h
- PM 12-18% of development, design 15-20% of frontend, QA 20-30% of development,
  DevOps 16-32 base hours + 8% of backend

Confidence: 90-100 detailed requirements, 75-89 some ambiguity, 60-74 high-level only, below 60 insufficient detail.

Return ONLY valid JSON with this structure:
{"suggested_screens":0,"suggested_complexity":"simple|medium|complex","suggested_features":[],"summary":"","confidence_score":0,"confidence_reason":"","breakdown":{"pm":0,"design":0,"frontend":0,"backend":0,"qa":0,"devops":0},"technical_requirements":[],"risks":[],"assumptions":[]}"""

FALLBACK_PROJECT_ANALYSIS = {
    "technologies": {
        "frontend": ["React", "TypeScript"],
        "backend": ["Node.js"],
        "database": ["PostgreSQL"],
        "cloud": ["AWS"],
    },
    "complexity": "medium",
    "suggested_screens": 10,
    "key_features": ["Core functionality based on description"],
    "challenges": ["Scope definition needed"],
    "recommended_experience": "mid",
    "platforms": ["web"],
    "estimated_weeks": 8,
    "summary": "Please provide more details for accurate analysis.",
}

FALLBACK_DOCUMENT_ANALYSIS = {
    "suggested_screens": 10,
    "suggested_complexity": "medium",
    "suggested_features": ["Unable to extract specific features"],
    "summary": "Document analyzed but structured extraction was limited. Manual review recommended.",
    "confidence_score": 45,
    "confidence_reason": "Limited confidence due to extraction difficulties. Please verify estimates manually.",
    "estimated_hours": 400,
    "estimated_weeks": 10,
    "estimated_cost": 35000,
    "breakdown": {"pm": 40, "design": 60, "frontend": 120, "backend": 100, "qa": 50, "devops": 30},
    "technical_requirements": ["Review document manually for technical requirements"],
    "risks": ["Low confidence estimate - verify requirements"],
    "assumptions": ["Standard project assumptions applied"],
}

# Simple in-memory prompt cache, keyed on the full prompt, max 50 entries
_prompt_cache: dict = {}
_CACHE_MAX = 50


def call_gemini(prompt: str, temperature: float = 0.3, json_mode: bool = False) -> str:
    """Call Gemini and return the raw response text. Raises AIServiceError on failure."""
    if prompt in _prompt_cache:
        return _prompt_cache[prompt]

    api_key = settings.GEMINI_API_KEY
    if not api_key:
        raise AIServiceError("GEMINI_API_KEY not configured", status_code=503)

    url = (
        f"https://generativelanguage.googleapis.com/v1beta/models/{settings.GEMINI_MODEL}"
        f":generateContent?key={api_key}"
    )
    generation_config = {"temperature": temperature}
    if json_mode:
        generation_config["responseMimeType"] = "application/json"
    payload = json.dumps({
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }).encode("utf-8")

    req = urllib.request.Request(
        url, data=payload,
        headers={"Content-Type": "application/json"},
        method="POST",
    )

    try:
        with urllib.request.urlopen(req, timeout=settings.GEMINI_TIMEOUT_SECONDS) as response:
            result = json.loads(response.read())
    except urllib.error.HTTPError as e:
        error_body = e.read().decode(errors="replace")
        logger.error("Gemini API error %s: %s", e.code, error_body[:500])
        if e.code == 429:
            raise AIRateLimitError()
        if e.code == 402:
            raise AIServiceError("AI credits exhausted. Please add credits to continue.", status_code=402)
        raise AIServiceError(f"Gemini API error: {e.code}")
    except Exception as e:
        raise AIServiceError(f"Gemini call failed: {e}")

    try:
        text = result["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise AIServiceError("No analysis content received")

    if len(_prompt_cache) >= _CACHE_MAX:
        _prompt_cache.pop(next(iter(_prompt_cache)))
    _prompt_cache[prompt] = text
    return text


def _extract_json_object(text: str):
    """Pull the first {...} block out of a response that may be wrapped in prose or markdown."""
    match = re.search(r"\{[\s\S]*\}", text or "")
    if not match:
        raise ValueError("No JSON found in response")
    return json.loads(match.group(0))


def _safe_int(value, default: int = 0) -> int:
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return default


def _safe_float(value, default: float = 0.0) -> float:
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def _str_list(value) -> list:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


class AIAdvisor:
    """Turns descriptions and documents into configuration suggestions."""

    def analyze_project(self, description: str, project_type: str = "web-app") -> ProjectAnalysis:
        description = (description or "").strip()
        if len(description) < MIN_DESCRIPTION_CHARS:
            raise ValueError("Please provide a more detailed project description")

        project_type = getattr(project_type, "value", project_type)
        logger.info("Analyzing project description: %s", description[:100])
        prompt = (
            f"{PROJECT_PROMPT}\n\nProject Type: {project_type}\n\n"
            f"Project Description:\n{description}"
        )
        text = call_gemini(prompt, temperature=0.3)

        try:
            parsed = _extract_json_object(text)
            if not isinstance(parsed, dict):
                raise ValueError("AI response is not an object")
        except ValueError as e:
            logger.warning("Failed to parse project analysis (%s) — using fallback", e)
            return ProjectAnalysis(**FALLBACK_PROJECT_ANALYSIS, fallback=True)

        return self._normalize_project_analysis(parsed)

    def _normalize_project_analysis(self, raw: dict) -> ProjectAnalysis:
        tech = raw.get("technologies") or {}
        if not isinstance(tech, dict):
            tech = {}
        return ProjectAnalysis(
            technologies=TechnologySuggestion(
                frontend=_str_list(tech.get("frontend")),
                backend=_str_list(tech.get("backend")),
                database=_str_list(tech.get("database")),
                cloud=_str_list(tech.get("cloud")),
            ),
            complexity=str(raw.get("complexity") or "medium").lower(),
            suggested_screens=max(0, _safe_int(raw.get("suggested_screens"), default=10)),
            key_features=_str_list(raw.get("key_features")),
            challenges=_str_list(raw.get("challenges")),
            recommended_experience=str(raw.get("recommended_experience") or "mid").lower(),
            platforms=_str_list(raw.get("platforms")) or ["web"],
            estimated_weeks=max(0.0, _safe_float(raw.get("estimated_weeks"), default=8)),
            summary=str(raw.get("summary") or ""),
        )

    def analyze_document(self, content: str, project_type: str = "web-app",
                         experience_level: str = "mid", platforms=None) -> DocumentAnalysis:
        """
        Estimate a project from its requirements document.

        The model's per-stage hours are scaled here, in Python:
        pm/design/backend by experience, frontend/qa by experience and
        platform overhead, devops by platform overhead only.
        """
        content = (content or "").strip()
        if not content:
            raise ValueError("Document is empty — no text to analyze")
        if len(content) > MAX_DOCUMENT_CHARS:
            content = content[:MAX_DOCUMENT_CHARS] + "\n\n[DOCUMENT TRUNCATED — remaining pages not analyzed]"

        project_type = getattr(project_type, "value", project_type)
        experience_mult = EXPERIENCE_MULTIPLIERS.get(
            _as_enum(ExperienceLevel, experience_level), EXPERIENCE_MULTIPLIERS[ExperienceLevel.MID]
        )
        platform_values = platforms or ["web"]
        platform_mult = max(
            [PLATFORM_OVERHEAD.get(_as_enum(Platform, p), 1.0) for p in platform_values] + [1.0]
        )
        platform_names = ", ".join(getattr(p, "value", str(p)) for p in platform_values)

        logger.info("Analyzing %s document (%d chars)", project_type, len(content))
        prompt = (
            f"{DOCUMENT_PROMPT}\n\n"
            f"Analyze this {project_type} project document thoroughly.\n\n"
            f"CONTEXT:\n- Team Experience Level: {getattr(experience_level, 'value', experience_level)}\n"
            f"- Target Platforms: {platform_names}\n"
            f"- Platform Complexity Multiplier: {platform_mult:.2f}x\n"
            f"- Experience Adjustment: {experience_mult:.2f}x\n\n"
            f"DOCUMENT CONTENT:\n\"\"\"\n{content}\n\"\"\""
        )
        text = call_gemini(prompt, temperature=0.1, json_mode=True)

        try:
            parsed = _extract_json_object(text)
            if not isinstance(parsed, dict):
                raise ValueError("AI response is not an object")
        except ValueError as e:
            logger.warning("Failed to parse document analysis (%s) — using fallback", e)
            return DocumentAnalysis(
                **FALLBACK_DOCUMENT_ANALYSIS, analyzed_at=datetime.utcnow(), fallback=True,
            )

        screens = max(0, _safe_int(parsed.get("suggested_screens"), default=10))
        breakdown = parsed.get("breakdown")
        if not isinstance(breakdown, dict):
            breakdown = {
                "pm": 40, "design": screens * 4, "frontend": screens * 16,
                "backend": screens * 10, "qa": 48, "devops": 32,
            }

        adjusted = self.scale_breakdown(breakdown, experience_mult, platform_mult)
        total_hours = sum(adjusted.values())
        total_cost = sum(hours * BREAKDOWN_RATES[key] for key, hours in adjusted.items())

        confidence = parsed.get("confidence_score")
        confidence = 70.0 if confidence is None else _safe_float(confidence, default=70.0)

        return DocumentAnalysis(
            suggested_screens=screens,
            suggested_complexity=str(parsed.get("suggested_complexity") or "medium").lower(),
            suggested_features=_str_list(parsed.get("suggested_features")),
            summary=str(parsed.get("summary") or ""),
            confidence_score=min(100.0, max(0.0, confidence)),
            confidence_reason=str(parsed.get("confidence_reason")
                                  or "Analysis completed with standard confidence."),
            estimated_hours=total_hours,
            estimated_weeks=math.ceil(total_hours / 40),
            estimated_cost=round_half_away(total_cost),
            breakdown=StageBreakdown(**adjusted),
            technical_requirements=_str_list(parsed.get("technical_requirements")),
            risks=_str_list(parsed.get("risks")),
            assumptions=_str_list(parsed.get("assumptions")),
            analyzed_at=datetime.utcnow(),
        )

    def scale_breakdown(self, breakdown: dict, experience_mult: float, platform_mult: float) -> dict:
        """Apply experience and platform multipliers per stage, rounding each stage."""
        factors = {
            "pm": experience_mult,
            "design": experience_mult,
            "frontend": experience_mult * platform_mult,
            "backend": experience_mult,
            "qa": experience_mult * platform_mult,
            "devops": platform_mult,
        }
        return {
            key: round_half_away(max(0.0, _safe_float(breakdown.get(key))) * factor)
            for key, factor in factors.items()
        }


def _as_enum(enum_cls, value):
    try:
        return enum_cls(getattr(value, "value", value))
    except ValueError:
        return None


def suggestion_to_patch(analysis) -> dict:
    """
    Map an AI suggestion onto a draft merge-patch.

    Only values that fit the configuration's option sets are carried over;
    anything else is dropped and left for the user to pick.
    """
    if isinstance(analysis, DocumentAnalysis):
        complexity = analysis.suggested_complexity
        screens = analysis.suggested_screens
        platforms = []
    else:
        complexity = analysis.complexity
        screens = analysis.suggested_screens
        platforms = analysis.platforms

    patch = {}
    complexity = _as_enum(Complexity, complexity)
    if complexity is not None:
        patch["complexity"] = complexity.value
    if screens is not None and screens >= 0:
        patch["unique_screens"] = int(screens)
    for name in platforms:
        platform = _as_enum(Platform, str(name).lower())
        if platform is not None:
            patch["platform"] = platform.value
            break
    return patch
