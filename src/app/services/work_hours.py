"""Normalização aditiva de horários de funcionamento dos itens do postback.

Cada par hora/minuto (open/close) do timetable semanal ganha um campo
`time` no formato HH:MM; os subcampos originais permanecem intactos.
"""

from __future__ import annotations

from typing import Any

WEEK_DAYS = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_time_of_day(hour: int | float, minute: int | float) -> str:
    """Formata hora/minuto como HH:MM."""
    return f"{int(hour):02d}:{int(minute):02d}"


def _annotate(point: Any) -> None:
    if isinstance(point, dict) and _is_number(point.get("hour")) and _is_number(point.get("minute")):
        point["time"] = format_time_of_day(point["hour"], point["minute"])


def normalize_work_hours(item: Any) -> Any:
    """Acrescenta `time` aos pontos open/close do timetable do item.

    Modifica o item no lugar e o retorna; itens sem timetable passam intactos.
    """
    if not isinstance(item, dict):
        return item
    work_hours = item.get("work_hours")
    if not isinstance(work_hours, dict):
        return item
    timetable = work_hours.get("timetable")
    if not isinstance(timetable, dict):
        return item

    for day in WEEK_DAYS:
        slots = timetable.get(day)
        if not isinstance(slots, list):
            continue
        for slot in slots:
            if not isinstance(slot, dict):
                continue
            _annotate(slot.get("open"))
            _annotate(slot.get("close"))
    return item
