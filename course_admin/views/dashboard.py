import asyncio
from datetime import date
from typing import List, Optional

from course_admin.config.settings import settings
from course_admin.schemas.dashboard_schemas import DashboardStats, DashboardSummary
from course_admin.schemas.registration_schemas import Registration
from course_admin.schemas.response_schemas import OperationResult
from course_admin.utils.logging import get_logger
from course_admin.utils.notifications import LoggingNotifier, Notification, Notifier

logger = get_logger()


def most_recent_registrations(
    registrations: List[Registration], limit: int
) -> List[Registration]:
    """Newest first by registration date; undated records sort last."""
    return sorted(
        registrations,
        key=lambda r: (r.registered_on or date.min, r.id),
        reverse=True,
    )[:limit]


class Dashboard:
    """
    Read-only summary: four counters and the latest registrations.

    The backend has no aggregate contract of its own. When DASHBOARD_STATS_PATH
    is configured the counters come from that endpoint; otherwise they are
    counted from the four collections, and `summary.source` says which.
    """

    def __init__(self, api, notifier: Optional[Notifier] = None):
        self.api = api
        self.notifier = notifier or LoggingNotifier()
        self.summary: Optional[DashboardSummary] = None
        self.is_loading = False
        self._warned_no_endpoint = False

    async def load(self) -> OperationResult[DashboardSummary]:
        self.is_loading = True
        try:
            if settings.DASHBOARD_STATS_PATH:
                result = await self._load_from_endpoint()
            else:
                result = await self._load_derived()
        finally:
            self.is_loading = False

        if result.success:
            self.summary = result.data
        else:
            self.notifier.notify(Notification.error("Failed to load dashboard data"))
        return result

    async def _load_from_endpoint(self) -> OperationResult[DashboardSummary]:
        stats_result, registrations_result = await asyncio.gather(
            self.api.get_dashboard_stats(), self.api.list_registrations()
        )
        if not stats_result.success:
            return OperationResult.fail(stats_result.error)
        if not registrations_result.success:
            return OperationResult.fail(registrations_result.error)
        return OperationResult.ok(
            DashboardSummary(
                stats=stats_result.data,
                recent_registrations=most_recent_registrations(
                    registrations_result.data, settings.RECENT_ACTIVITY_LIMIT
                ),
                source="endpoint",
            )
        )

    async def _load_derived(self) -> OperationResult[DashboardSummary]:
        if not self._warned_no_endpoint:
            logger.warning(
                "No dashboard aggregate endpoint configured; counting the collections instead"
            )
            self._warned_no_endpoint = True

        results = await asyncio.gather(
            self.api.list_students(),
            self.api.list_courses(),
            self.api.list_registrations(),
            self.api.list_results(),
        )
        for result in results:
            if not result.success:
                return OperationResult.fail(result.error)

        students, courses, registrations, grades = (r.data for r in results)
        stats = DashboardStats(
            total_students=len(students),
            total_courses=len(courses),
            total_registrations=len(registrations),
            total_results=len(grades),
        )
        return OperationResult.ok(
            DashboardSummary(
                stats=stats,
                recent_registrations=most_recent_registrations(
                    registrations, settings.RECENT_ACTIVITY_LIMIT
                ),
                source="derived",
            )
        )
