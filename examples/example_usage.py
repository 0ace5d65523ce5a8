"""Example: drive the service layer directly (no Flask).

Controllers stay thin; the attendance rules live in the services.
"""

import importlib
import sys

from config import get_settings_module

from aquador_attendance.container import Settings, build_container
from aquador_attendance.core.exceptions import DomainError


def main(learner_id: str = "learner-demo") -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=Settings.from_module(settings))
    try:
        outcome = container.attendance_service.record(learner_id)
    except DomainError as e:
        print(f"refused ({e.status_code}): {e}")
        return
    print(outcome.message, outcome.action.value)


if __name__ == "__main__":
    main(*sys.argv[1:2])
