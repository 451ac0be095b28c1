"""
Historical Matcher — compares a fresh estimate with previously saved ones.

Looks at the most recent saved estimates of the same project type and
platform, scores their similarity, and when one is close enough nudges the
hour total 30% of the way towards what that project was estimated at.
"""

import logging

from . import models
from .calculators.base import round_half_away
from .schemas import HistoricalMatch, HistoricalMatchResponse

logger = logging.getLogger(__name__)


class HistoricalMatcher:
    """Similarity-scores saved estimates against a new one."""

    CANDIDATE_LIMIT = 10
    SIMILARITY_THRESHOLD = 60
    HOURS_TOLERANCE = 0.2  # within 20% counts as similar hours
    PULL_FACTOR = 0.3

    # Similarity points per matching attribute
    TYPE_POINTS = 40
    PLATFORM_POINTS = 30
    COMPLEXITY_POINTS = 20
    HOURS_POINTS = 10

    def find_match(self, db_session, project_type: str, platform: str,
                   complexity: str, total_hours: float) -> HistoricalMatchResponse:
        project_type = getattr(project_type, "value", project_type)
        platform = getattr(platform, "value", platform)
        complexity = getattr(complexity, "value", complexity)

        candidates = db_session.query(models.SavedEstimate).filter(
            models.SavedEstimate.project_type == project_type,
            models.SavedEstimate.platform == platform,
        ).order_by(models.SavedEstimate.created_at.desc()).limit(self.CANDIDATE_LIMIT).all()

        if not candidates:
            return HistoricalMatchResponse(
                match=None,
                message="No historical data available yet. Your estimate will help improve future predictions.",
            )

        best, best_score = None, 0
        for candidate in candidates:
            score = self.similarity(candidate, project_type, platform, complexity, total_hours)
            if score > best_score:
                best, best_score = candidate, score

        if best is None or best_score < self.SIMILARITY_THRESHOLD:
            return HistoricalMatchResponse(
                match=None,
                message="No closely matching historical projects found.",
            )

        adjusted = self.adjusted_hours(best.total_hours, total_hours)
        direction = "increasing" if adjusted > total_hours else "decreasing"
        logger.info("Historical match %s (score %d) for %s/%s", best.id, best_score, project_type, platform)

        return HistoricalMatchResponse(match=HistoricalMatch(
            project_name=best.project_name,
            accuracy=best_score,
            adjusted_hours=adjusted,
            original_hours=best.total_hours,
            suggestion=(
                f'Based on similar project "{best.project_name}", we suggest {direction} '
                f"your estimate by {abs(adjusted - total_hours):g} hours."
            ),
        ))

    def similarity(self, record, project_type: str, platform: str,
                   complexity: str, total_hours: float) -> int:
        score = 0
        if record.project_type == project_type:
            score += self.TYPE_POINTS
        if record.platform == platform:
            score += self.PLATFORM_POINTS
        if record.complexity == complexity:
            score += self.COMPLEXITY_POINTS
        if total_hours > 0:
            diff = abs((record.total_hours or 0) - total_hours) / total_hours
            if diff < self.HOURS_TOLERANCE:
                score += self.HOURS_POINTS
        return score

    def adjusted_hours(self, historical_hours: float, total_hours: float) -> float:
        """Move total_hours 30% of the way towards the historical figure."""
        # Same as total * (1 + (historical/total - 1) * pull), without dividing by zero
        return round_half_away(total_hours + (historical_hours - total_hours) * self.PULL_FACTOR)
