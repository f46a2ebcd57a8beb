from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from scheduling.core import config


PORTUGUESE_MONTHS = (
    'janeiro',
    'fevereiro',
    'março',
    'abril',
    'maio',
    'junho',
    'julho',
    'agosto',
    'setembro',
    'outubro',
    'novembro',
    'dezembro',
)


class AppointmentDateFormatter:
    """Formats appointment dates for Portuguese-speaking users.

    Stored dates are naive UTC; they are shifted to ``timezone`` before
    formatting, e.g. ``dia 05 de março, às 9:00h``.
    """

    def __init__(self, timezone_name: str | None = None):
        self.timezone = ZoneInfo(timezone_name or config.DISPLAY_TIMEZONE)

    def format(self, value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        local = value.astimezone(self.timezone)
        month = PORTUGUESE_MONTHS[local.month - 1]
        return f'dia {local.day:02d} de {month}, às {local.hour}:{local.minute:02d}h'


default_formatter = AppointmentDateFormatter()
