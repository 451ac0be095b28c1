"""
Historical match tests — similarity scoring against saved estimates.
"""

from datetime import datetime, timedelta

from estimator import models
from estimator.historical_matcher import HistoricalMatcher


def _save(db, name="Old Shop", project_type="web-app", platform="web", complexity="medium",
          total_hours=800.0, age_days=1):
    record = models.SavedEstimate(
        project_name=name,
        project_type=project_type,
        platform=platform,
        complexity=complexity,
        total_hours=total_hours,
        total_weeks=round(total_hours / 40, 1),
        total_cost=total_hours * 90,
        form_data={},
        stage_estimates=[],
        created_at=datetime.utcnow() - timedelta(days=age_days),
    )
    db.add(record)
    db.commit()
    return record


def test_no_history(db):
    result = HistoricalMatcher().find_match(db, "web-app", "web", "medium", 708)
    assert result.match is None
    assert "No historical data" in result.message


def test_full_match_pulls_towards_history(db):
    _save(db, total_hours=800)
    result = HistoricalMatcher().find_match(db, "web-app", "web", "medium", 708)

    assert result.match is not None
    assert result.match.accuracy == 100
    assert result.match.original_hours == 800
    # 708 x (1 + (800/708 - 1) x 0.3) = 735.6
    assert result.match.adjusted_hours == 736
    assert "increasing" in result.match.suggestion
    assert "Old Shop" in result.match.suggestion


def test_different_complexity_still_matches(db):
    _save(db, complexity="complex", total_hours=2000)
    result = HistoricalMatcher().find_match(db, "web-app", "web", "medium", 708)

    assert result.match.accuracy == 70
    assert result.match.adjusted_hours == 1096  # 708 + (2000 - 708) x 0.3 = 1095.6
    assert "increasing" in result.match.suggestion


def test_lower_history_suggests_decrease(db):
    _save(db, total_hours=600)
    result = HistoricalMatcher().find_match(db, "web-app", "web", "medium", 708)
    assert result.match.adjusted_hours == 676  # 708 - 108 x 0.3 = 675.6
    assert "decreasing" in result.match.suggestion


def test_other_type_or_platform_ignored(db):
    _save(db, project_type="website")
    _save(db, platform="ios")
    result = HistoricalMatcher().find_match(db, "web-app", "web", "medium", 708)
    assert result.match is None
    assert "No historical data" in result.message


def test_low_score_has_distinct_message(db):
    # Same type and platform always scores 70 or more, so force the threshold up
    _save(db, complexity="complex", total_hours=5000)
    matcher = HistoricalMatcher()
    matcher.SIMILARITY_THRESHOLD = 80
    result = matcher.find_match(db, "web-app", "web", "medium", 708)
    assert result.match is None
    assert result.message == "No closely matching historical projects found."


def test_best_score_wins(db):
    _save(db, name="Far Off", complexity="simple", total_hours=3000, age_days=1)
    _save(db, name="Close", complexity="medium", total_hours=700, age_days=2)
    result = HistoricalMatcher().find_match(db, "web-app", "web", "medium", 708)
    assert result.match.project_name == "Close"


def test_only_ten_newest_considered(db):
    _save(db, name="Ancient Twin", total_hours=708, age_days=100)
    for i in range(10):
        _save(db, name=f"Recent {i}", complexity="simple", total_hours=5000, age_days=i)
    result = HistoricalMatcher().find_match(db, "web-app", "web", "medium", 708)
    assert result.match.project_name == "Recent 0"
    assert result.match.accuracy == 70


def test_zero_hours_skips_hours_bonus(db):
    _save(db, total_hours=0)
    result = HistoricalMatcher().find_match(db, "web-app", "web", "medium", 0)
    assert result.match.accuracy == 90
    assert result.match.adjusted_hours == 0


# ============================================================
# API
# ============================================================

def test_historical_match_endpoint(client, db):
    _save(db, total_hours=800)
    response = client.post("/api/estimates/historical-match", json={
        "project_type": "web-app", "platform": "web", "complexity": "medium", "total_hours": 708,
    })
    assert response.status_code == 200
    assert response.json()["match"]["adjusted_hours"] == 736


def test_historical_match_endpoint_validates(client):
    response = client.post("/api/estimates/historical-match", json={
        "project_type": "spaceship", "platform": "web", "complexity": "medium", "total_hours": 708,
    })
    assert response.status_code == 422
