"""
Email SMTP notifier for alert delivery.

Sends the HTML rendering of an alert over an authenticated SMTP session.
One connection is opened per alert.
"""

from __future__ import annotations

import contextlib
import smtplib
import ssl
from email.mime.text import MIMEText
from typing import TYPE_CHECKING, Any

from docker_alertd.alerting.base import BaseNotifier, NotifierFactory
from docker_alertd.alerting.models import compose_subject
from docker_alertd.exceptions import DeliveryError

if TYPE_CHECKING:
    from docker_alertd.alerting.models import Alert
    from docker_alertd.config import EmailConfig

# Port on which the server expects TLS from the first byte.
IMPLICIT_TLS_PORT = 465

ERR_NO_SMTP = "no SMTP host specified"
ERR_NO_TO = "no recipients specified"
ERR_NO_FROM = "no from address specified"
ERR_NO_USER = "no username specified"
ERR_NO_PASS = "no password specified"
ERR_NO_PORT = "no port specified"
ERR_NO_SUBJECT = "no subject specified"


class EmailNotifier(BaseNotifier):
    """
    Email SMTP notifier.

    Port 465 connects with implicit TLS; other ports connect in the clear and
    upgrade with STARTTLS when the server offers it. Either way the session
    is authenticated with the configured username and password.
    """

    name = "email"
    validation_context = "email settings validation fail"

    def __init__(self, config: EmailConfig) -> None:
        super().__init__(config)
        self._email_config = config

    def _log_context(self) -> dict[str, Any]:
        return {"smtp_host": self._email_config.smtp}

    def is_omitted(self) -> bool:
        config = self._email_config
        return not (
            config.smtp
            or config.username
            or config.password
            or config.port
            or config.from_address
            or config.to
            or config.subject
            or config.timeout_seconds is not None
        )

    def missing_fields(self) -> list[str]:
        config = self._email_config
        missing: list[str] = []

        if not config.smtp:
            missing.append(ERR_NO_SMTP)
        if not config.to:
            missing.append(ERR_NO_TO)
        if not config.from_address:
            missing.append(ERR_NO_FROM)
        if not config.username:
            missing.append(ERR_NO_USER)
        if not config.password:
            missing.append(ERR_NO_PASS)
        if not config.port:
            missing.append(ERR_NO_PORT)
        if not config.subject:
            missing.append(ERR_NO_SUBJECT)

        return missing

    def build_message(self, alert: Alert) -> MIMEText:
        """
        Build the email for an alert.

        Args:
            alert: Alert to render.

        Returns:
            MIME message with From, To and Subject set.
        """
        config = self._email_config

        message = MIMEText(alert.dump_email(), "html", "utf-8")
        message["From"] = config.from_address
        message["To"] = ",".join(config.to)
        message["Subject"] = compose_subject(config.subject, alert.subject_addendums)
        return message

    def send(self, alert: Alert) -> None:
        """
        Send an alert email.

        Raises:
            DeliveryError: If connecting, authenticating or sending fails.
        """
        message = self.build_message(alert)

        try:
            self._send_smtp(message)
        except (smtplib.SMTPException, OSError) as e:
            self._logger.error("smtp_error", error=str(e))
            raise DeliveryError.wrapped(self.name, "error sending email", e) from e

        self._logger.info("alert email sent", recipients=len(self._email_config.to))

    def _connect(self) -> smtplib.SMTP:
        config = self._email_config
        context = ssl.create_default_context()

        self._logger.debug("smtp_connecting", host=config.smtp, port=config.port)

        if config.port == IMPLICIT_TLS_PORT:
            return smtplib.SMTP_SSL(
                config.smtp,
                config.port,
                context=context,
                **self._timeout_kwargs(),
            )

        server = smtplib.SMTP(config.smtp, config.port, **self._timeout_kwargs())
        try:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls(context=context)
                server.ehlo()
        except BaseException:
            server.close()
            raise
        return server

    def _send_smtp(self, message: MIMEText) -> None:
        config = self._email_config

        server = self._connect()
        try:
            server.login(config.username, config.password)
            server.sendmail(config.from_address, list(config.to), message.as_string())
        except BaseException:
            with contextlib.suppress(OSError):
                server.close()
            raise

        # Delivery is complete once sendmail returns.
        try:
            server.quit()
        except (smtplib.SMTPException, OSError) as e:
            self._logger.debug("smtp_quit_failed", error=str(e))


NotifierFactory.register(EmailNotifier.name, EmailNotifier)
