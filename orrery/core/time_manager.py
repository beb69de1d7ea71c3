"""
Simulation Clock
================

Time management for the orrery.
Accumulates simulated time under time dilation and pause, and converts
it to Julian dates.
"""

from datetime import datetime, timedelta

from .config import J2000_JD, SECONDS_PER_DAY, ClockParameters


class SimulationClock:
    """
    Manages simulated time.

    Provides:
    - Simulated seconds accumulated under time dilation and pause
    - Julian date relative to an epoch
    - Delta bookkeeping for the satellite integrator
    - An always-running animation clock for cosmetic effects
    """

    J2000_EPOCH = datetime(2000, 1, 1, 12, 0, 0)  # JD 2451545.0

    def __init__(self, params: ClockParameters = None):
        """
        Initialize simulation clock.

        Args:
            params: Clock parameters
        """
        self.params = params or ClockParameters()
        self.epoch_jd = self.params.epoch_jd
        self.days_per_real_second = self.params.days_per_real_second
        self.time_adjust_step = self.params.time_adjust_step

        self.time_dilation = self.params.time_dilation
        self.paused = self.params.start_paused
        self.elapsed_seconds = 0.0
        self.last_integrated_seconds = 0.0
        self.animation_time = 0.0

    def reset(self):
        """Reset clock to the epoch."""
        self.time_dilation = self.params.time_dilation
        self.paused = self.params.start_paused
        self.elapsed_seconds = 0.0
        self.last_integrated_seconds = 0.0
        self.animation_time = 0.0

    def tick(self, real_dt: float) -> float:
        """
        Advance the clock by one frame.

        Args:
            real_dt: Real seconds since the previous frame

        Returns:
            Accumulated simulated seconds
        """
        self.animation_time += real_dt

        if not self.paused:
            self.elapsed_seconds += (real_dt * self.time_dilation *
                                     self.days_per_real_second * SECONDS_PER_DAY)
        return self.elapsed_seconds

    def consume_integration_delta(self) -> float:
        """
        Simulated seconds since the previous call.

        Returns:
            Delta to hand to the integrator (negative when reversed)
        """
        delta = self.elapsed_seconds - self.last_integrated_seconds
        self.last_integrated_seconds = self.elapsed_seconds
        return delta

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    def speed_up(self):
        """Increase time dilation by one step (ignored while paused)."""
        if not self.paused:
            self.time_dilation += self.time_adjust_step

    def slow_down(self):
        """Decrease time dilation by one step; may go negative to reverse time."""
        if not self.paused:
            self.time_dilation -= self.time_adjust_step

    @property
    def elapsed_days(self) -> float:
        return self.elapsed_seconds / SECONDS_PER_DAY

    @property
    def julian_date(self) -> float:
        """
        Get Julian Date for current simulated time.

        Returns:
            Julian Date as float
        """
        return self.epoch_jd + self.elapsed_seconds / SECONDS_PER_DAY

    @property
    def current_utc(self) -> datetime:
        """Calendar date of the current simulated time."""
        return self.J2000_EPOCH + timedelta(days=self.julian_date - J2000_JD)

    @staticmethod
    def datetime_to_jd(dt: datetime) -> float:
        """
        Convert datetime to Julian Date.

        Args:
            dt: datetime object

        Returns:
            Julian Date
        """
        year = dt.year
        month = dt.month
        day = dt.day
        hour = dt.hour
        minute = dt.minute
        second = dt.second + dt.microsecond / 1e6

        if month <= 2:
            year -= 1
            month += 12

        A = int(year / 100)
        B = 2 - A + int(A / 4)

        jd = int(365.25 * (year + 4716)) + \
             int(30.6001 * (month + 1)) + \
             day + B - 1524.5 + \
             (hour + minute / 60 + second / 3600) / 24

        return jd

    @staticmethod
    def jd_to_datetime(jd: float) -> datetime:
        """
        Convert Julian Date to datetime.

        Args:
            jd: Julian Date

        Returns:
            datetime object
        """
        return SimulationClock.J2000_EPOCH + timedelta(days=jd - J2000_JD)

    def __repr__(self) -> str:
        state = "paused" if self.paused else f"x{self.time_dilation:.2f}"
        return f"SimulationClock(jd={self.julian_date:.5f}, {state})"
