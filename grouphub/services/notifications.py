"""Registration e-mails for people who are not yet registered users.

Representatives and members may be added to a group by e-mail before they
have an account. Those addresses receive an invitation to register.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

import aiosmtplib

from grouphub.core.config import Settings, get_settings
from grouphub.core.exceptions import NotificationError
from grouphub.core.logger import get_logger
from grouphub.core.rbac.roles import Role, DEFAULT_TYPE_USERS

logger = get_logger(__name__)


REGISTER_TEMPLATE = {
    "subject": "[{app_name}] Convite para cadastro",
    "body": """Olá,

Você foi adicionado(a) como {role_name} em um grupo no {app_name}.
Para acompanhar o grupo, conclua seu cadastro utilizando este e-mail ({email}).

---
Esta é uma mensagem automática do {app_name}.
""",
}


class RegistrationNotifier:
    """Sends registration invitations over SMTP."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _build_message(self, email: str, role: Role) -> MIMEMultipart:
        context = {
            "app_name": self.settings.app_name,
            "role_name": DEFAULT_TYPE_USERS[role].lower(),
            "email": email,
        }
        msg = MIMEMultipart()
        msg["From"] = f"{self.settings.smtp_from_name} <{self.settings.smtp_from_email}>"
        msg["To"] = email
        msg["Subject"] = REGISTER_TEMPLATE["subject"].format(**context)
        msg.attach(MIMEText(REGISTER_TEMPLATE["body"].format(**context), "plain"))
        return msg

    async def send_registration_invite(self, email: str, role: Role) -> bool:
        """
        Send the registration e-mail.

        Returns:
            True if the message was handed to the SMTP server, False when
            SMTP is not configured.

        Raises:
            NotificationError: if delivery fails or times out
        """
        if not self.settings.smtp_host:
            logger.warning("SMTP not configured, skipping registration e-mail")
            return False

        try:
            await aiosmtplib.send(
                self._build_message(email, role),
                hostname=self.settings.smtp_host,
                port=self.settings.smtp_port,
                username=self.settings.smtp_user,
                password=self.settings.smtp_password,
                start_tls=self.settings.smtp_use_tls,
                timeout=self.settings.smtp_timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.exception("Failed to send registration e-mail")
            raise NotificationError() from exc

        logger.info("Registration e-mail sent for role %s", role.name)
        return True
