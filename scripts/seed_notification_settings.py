"""Utility script to create or toggle notification settings in the database."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import (
    get_notification_settings,
    seed_notification_settings,
    set_notification_enabled,
)
from app.domain.exceptions import ValidationError
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the seeding run."""

    parser = argparse.ArgumentParser(
        description="Create missing notification settings (enabled) for every notifiable event type.",
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="EVENT_TYPE",
        help="Event type to switch off after seeding (may be repeated)",
    )
    parser.add_argument(
        "--enable",
        action="append",
        default=[],
        metavar="EVENT_TYPE",
        help="Event type to switch on after seeding (may be repeated)",
    )
    return parser.parse_args()


def main() -> None:
    """Seed settings and apply the requested switches."""

    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        created = seed_notification_settings(session)
        for event_type in args.enable:
            set_notification_enabled(session, event_type, True)
        for event_type in args.disable:
            set_notification_enabled(session, event_type, False)
        settings = get_notification_settings(session)
    except ValidationError as exc:
        session.rollback()
        raise SystemExit(f"Invalid event type: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not save notification settings: {exc}") from exc
    else:
        print(f"Created {len(created)} setting(s).")
        for setting in settings:
            print(f"  {setting.event_type}: {'on' if setting.enabled else 'off'}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
