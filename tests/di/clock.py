"""Mock clock provider for testing."""

from dishka import Scope, provide

from blog.util.clock import Clock, FixedClock
from blog.util.di.infrastructure.clock import ClockProvider


class MockClockProvider(ClockProvider):
    """Clock frozen at a known instant. Tests move it with set/advance."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_fixed_clock(self) -> FixedClock:
        """Provide the fixed clock itself, for tests that move time."""
        return FixedClock()

    @provide(scope=Scope.APP)
    def get_clock(self, clock: FixedClock) -> Clock:
        """Provide the same fixed clock to the application."""
        return clock
