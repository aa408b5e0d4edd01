"""Flask CLI commands for Daybook."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("daybook-create-user")
    @click.argument("username")
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option("--full-name", default=None, help="Display name for the account")
    def create_user_command(username: str, password: str, full_name: str | None) -> None:
        """Create a login account."""

        from .extensions import get_session_factory
        from .services.auth import create_user

        try:
            user = create_user(
                username=username,
                password=password,
                full_name=full_name,
                session_factory=get_session_factory(),
            )
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Created user {user.username} ({user.id})")

    @app.cli.command("daybook-week")
    @click.argument("username")
    @click.option(
        "--today",
        "today_raw",
        default=None,
        help="Report as of this day (YYYY-MM-DD); defaults to today in DAYBOOK_TIMEZONE",
    )
    def week_command(username: str, today_raw: str | None) -> None:
        """Print each habit's last seven days, streak and weekly rate."""

        from .extensions import get_session_factory
        from .infra.repositories import SQLModelHabitRepository
        from .services.auth import get_user_by_username
        from .services.completions import CompletionIndex, build_indexes
        from .services.dates import weekday_name
        from .services.habits import summarize_habit

        config = app.config["DAYBOOK_CONFIG"]
        tz = config.tzinfo()
        if today_raw:
            try:
                today = date.fromisoformat(today_raw)
            except ValueError as exc:
                raise click.BadParameter("expected YYYY-MM-DD", param_hint="--today") from exc
        else:
            today = datetime.now(timezone.utc).astimezone(tz).date()

        session_factory = get_session_factory()
        user = get_user_by_username(username, session_factory)
        if user is None:
            raise click.ClickException(f"No such user: {username}")

        repo = SQLModelHabitRepository(session_factory)
        habits = repo.list_all(user_id=user.id)
        if not habits:
            click.echo("No habits yet.")
            return
        indexes = build_indexes(
            repo.completions_for([habit.id for habit in habits], user_id=user.id), tz
        )

        days = [today - timedelta(days=offset) for offset in range(6, -1, -1)]
        click.echo(f"{'Habit':<24} " + " ".join(weekday_name(day) for day in days) + "  Streak  Rate")
        for habit in habits:
            summary = summarize_habit(habit, indexes.get(habit.id, CompletionIndex(tz=tz)), today)
            marks = []
            for entry in summary.history:
                if entry["completed"]:
                    marks.append(" x ")
                elif entry["due"]:
                    marks.append(" . ")
                else:
                    marks.append("   ")
            click.echo(
                f"{habit.title[:24]:<24} "
                + " ".join(marks)
                + f"  {summary.current_streak:>6}  {summary.weekly_rate:>3}%"
            )
