"""
Domain exceptions for analytics app.

Exception Hierarchy:
    AnalyticsServiceError (base)
    └── InvalidPeriodError

Usage:
    from apps.analytics.exceptions import InvalidPeriodError

    try:
        start, end = resolve_period(preset)
    except InvalidPeriodError as e:
        return Response({'error': str(e)}, status=400)
"""


class AnalyticsServiceError(Exception):
    """Base exception for all analytics service errors."""
    pass


class InvalidPeriodError(AnalyticsServiceError, ValueError):
    """Raised for an unknown period preset."""
    pass
