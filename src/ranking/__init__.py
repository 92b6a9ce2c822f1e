"""Ranking of finished sessions."""

from .standings import Standing, compute_standings, ranking_key, winners

__all__ = ["Standing", "compute_standings", "ranking_key", "winners"]
