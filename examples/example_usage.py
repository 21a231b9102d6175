"""Ví dụ: dùng service layer (không qua Flask).

Registers two guests, scans one of them in and out, then prints the stats
and the CSV report.
"""

import importlib

from config import get_settings_module

from src.event_checkin.event_checkin.container import build_container
from src.event_checkin.event_checkin.stats.service import compute_stats


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)

    container.registry.add("Alice", "081-111-1111")
    container.registry.add("Bob", "0822222222")

    for _ in range(3):
        outcome = container.attendance_service.scan("0811111111")
        print(outcome.result.value)

    print(compute_stats(container.registry.snapshot()).as_dict())
    payload, _ = container.report_service.export("csv")
    print(payload.decode("utf-8-sig"))


if __name__ == "__main__":
    main()
