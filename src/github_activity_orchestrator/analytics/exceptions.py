"""Exceptions raised by the analytics layer."""


class AnalyticsLifecycleError(RuntimeError):
    """A run was started twice, or recorded to without being started.

    This is a programming error; callers must not swallow it.
    """
