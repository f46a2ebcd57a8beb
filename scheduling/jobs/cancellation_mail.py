import logging
import smtplib
from datetime import datetime
from email.message import EmailMessage
from typing import Any

from scheduling.core import config
from scheduling.core.formatting import AppointmentDateFormatter, default_formatter


logger = logging.getLogger(__name__)


class CancellationMail:
    """Tells the provider that a customer canceled an appointment."""

    key = 'CancellationMail'

    def __init__(self, formatter: AppointmentDateFormatter | None = None):
        self.formatter = formatter or default_formatter

    def build_message(self, appointment: dict[str, Any]) -> EmailMessage:
        provider = appointment['provider']
        customer = appointment['user']
        date = datetime.fromisoformat(appointment['date'])

        message = EmailMessage()
        message['From'] = config.MAIL_FROM
        message['To'] = f"{provider['name']} <{provider['email']}>"
        message['Subject'] = 'Agendamento cancelado'
        message.set_content(
            f"Olá, {provider['name']}\n\n"
            f"Houve um novo cancelamento de horário.\n\n"
            f"Cliente: {customer['name']}\n"
            f"Data/hora: {self.formatter.format(date)}\n\n"
            "O horário agora está disponível para novos agendamentos.\n"
        )
        return message

    def handle(self, data: dict[str, Any]) -> None:
        appointment = data['appointment']

        if not config.MAIL_HOST:
            logger.warning(
                'Cancellation mail for appointment %s skipped: MAIL_HOST is not configured.',
                appointment['id'],
            )
            return

        message = self.build_message(appointment)
        with smtplib.SMTP(config.MAIL_HOST, config.MAIL_PORT, timeout=10) as smtp:
            if config.MAIL_SECURE:
                smtp.starttls()
            if config.MAIL_USER:
                smtp.login(config.MAIL_USER, config.MAIL_PASSWORD)
            smtp.send_message(message)
        logger.info('Cancellation mail for appointment %s sent to %s', appointment['id'], message['To'])
