"""
User statistics.

Merges the two grouping passes over the user collection into one
:class:`UserStats` summary:

1. users grouped by ``status`` with a count and mean age per group,
2. users grouped by address city, most populated first.

``averageAge`` is the mean of the per-status means, so every status weighs
the same regardless of its size.  This is the published contract of the
endpoint.  :func:`population_mean_age` gives the per-user mean for callers
that ask for ``weighted=true``.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from app.schemas.statistics import CityStat, StatusStat, UserStats

TOP_CITIES = 5
AVERAGE_AGE_DECIMALS = 1


def mean_of_group_means(groups: Sequence[StatusStat]) -> float:
    """Unweighted mean of ``avg_age`` across groups; 0 when there are none."""
    if not groups:
        return 0
    return sum(g.avg_age for g in groups) / len(groups)


def population_mean_age(groups: Sequence[StatusStat]) -> float:
    """Mean age over all users, reconstructed from group counts and means."""
    total = sum(g.count for g in groups)
    if total == 0:
        return 0
    return sum(g.avg_age * g.count for g in groups) / total


def top_cities(groups: Iterable[CityStat], limit: int = TOP_CITIES) -> list[CityStat]:
    """Cities ordered by user count, descending, at most ``limit`` of them."""
    return sorted(groups, key=lambda c: c.count, reverse=True)[:limit]


def build_user_stats(
    status_groups: Sequence[StatusStat],
    city_groups: Iterable[CityStat],
    weighted: bool = False,
    top: int = TOP_CITIES,
) -> UserStats:
    """Reduce the status groups and merge the top cities into one summary.

    Args:
        status_groups: One entry per distinct status
        city_groups: One entry per distinct city (may already be truncated)
        weighted: Use the population mean instead of the mean of group means
        top: Number of cities to keep

    Returns:
        The merged summary.  An empty collection yields zeros and empty lists.
    """
    status_stats = sorted(status_groups, key=lambda g: g.status)
    average = population_mean_age(status_stats) if weighted else mean_of_group_means(status_stats)

    return UserStats(
        total_users=sum(g.count for g in status_stats),
        average_age=round(average, AVERAGE_AGE_DECIMALS) if status_stats else 0,
        status_stats=status_stats,
        top_cities=top_cities(city_groups, top),
    )
