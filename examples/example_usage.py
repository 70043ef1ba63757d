"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

import importlib

from config import get_settings_module

from congregation_attendance.common.datetime_utils import now_local, year_month_of
from congregation_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    period = year_month_of(now_local().date())
    for unit in container.units_repo.list_units():
        report = container.report_service.monthly_report(unit.unit_id, period)
        print(unit.name, report.total_services, {k.value: v for k, v in report.category_counts.items()})


if __name__ == "__main__":
    main()
