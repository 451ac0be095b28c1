"""
Stage calculators — the deterministic core of the estimator.

Pure Python arithmetic. No I/O, no AI.
Given a validated ProjectConfiguration, each calculator produces one
StageEstimate; estimation_engine.calculate_estimate sums them.
"""
