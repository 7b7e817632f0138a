"""CLI tests."""

from datetime import datetime

from typer.testing import CliRunner

from sleep_cycle_server import __version__
from sleep_cycle_server.cli import _resolve_time, app

runner = CliRunner()


def test_version() -> None:
    """Test version command."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert f"v{__version__}" in result.output


class TestSleepNowCommand:
    """Tests for the sleep-now command."""

    def test_default_profile(self) -> None:
        """Test wake times for the default profile going to bed at 23:00."""
        result = runner.invoke(app, ["sleep-now", "--at", "2026-01-20T23:00"])

        assert result.exit_code == 0, result.output
        assert "Going to bed at 23:00" in result.output
        assert "* 07:46  5 cycles  7 h 30 min asleep  window 07:31 – 08:01" in result.output
        assert "* 09:28  6 cycles  9 h asleep" in result.output
        assert "7 cycles" in result.output

    def test_explicit_cycles(self) -> None:
        """Test only the requested cycle counts are shown."""
        result = runner.invoke(app, ["sleep-now", "--at", "23:00", "-c", "4", "-c", "5"])

        assert result.exit_code == 0, result.output
        lines = [line for line in result.output.splitlines() if "cycles" in line]
        assert len(lines) == 2

    def test_invalid_profile(self) -> None:
        """Test out-of-range age is rejected."""
        result = runner.invoke(app, ["sleep-now", "--age", "0"])

        assert result.exit_code != 0


class TestWakeAtCommand:
    """Tests for the wake-at command."""

    def test_default_profile(self) -> None:
        """Test bedtimes for the default profile waking at 07:00."""
        result = runner.invoke(app, ["wake-at", "2026-01-21T07:00"])

        assert result.exit_code == 0, result.output
        assert "To wake up at 07:00" in result.output
        assert "* 22:13  5 cycles" in result.output
        assert "* 20:31  6 cycles" in result.output

    def test_female_senior(self) -> None:
        """Test profile options change the recommendation."""
        result = runner.invoke(
            app, ["wake-at", "07:00", "--age", "65", "--gender", "female", "-c", "5"]
        )

        assert result.exit_code == 0, result.output
        assert "5 cycles  7 h 5 min asleep" in result.output

    def test_unknown_user_gets_default_profile(self) -> None:
        """Test a user without a stored profile falls back to the default."""
        result = runner.invoke(app, ["wake-at", "2026-01-21T07:00", "--user", "nobody"])

        assert result.exit_code == 0, result.output
        assert "* 22:13  5 cycles" in result.output


class TestResolveTime:
    """Tests for turning CLI time options into datetimes."""

    now = datetime(2026, 1, 21, 10, 0)

    def test_missing_value_is_now(self) -> None:
        """Test no value means the current time."""
        assert _resolve_time(None, self.now) == self.now

    def test_bare_time_is_today(self) -> None:
        """Test a bare HH:MM lands on today's date."""
        value = datetime.strptime("07:00", "%H:%M")

        assert _resolve_time(value, self.now) == datetime(2026, 1, 21, 7, 0)

    def test_passed_wake_time_moves_to_tomorrow(self) -> None:
        """Test an upcoming bare time already passed today is tomorrow."""
        value = datetime.strptime("07:00", "%H:%M")

        assert _resolve_time(value, self.now, upcoming=True) == datetime(2026, 1, 22, 7, 0)

    def test_later_wake_time_stays_today(self) -> None:
        """Test an upcoming bare time later today is kept."""
        value = datetime.strptime("22:30", "%H:%M")

        assert _resolve_time(value, self.now, upcoming=True) == datetime(2026, 1, 21, 22, 30)

    def test_full_datetime_unchanged(self) -> None:
        """Test explicit dates are used as given."""
        value = datetime(2026, 1, 20, 7, 0)

        assert _resolve_time(value, self.now, upcoming=True) == value
