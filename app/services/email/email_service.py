# ===== app/services/email/email_service.py =====
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import List, Optional
import logging

from app.config.settings import settings
from app.models.appointment import Appointment

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending emails via SMTP"""

    @staticmethod
    def _get_smtp_connection():
        """Create and return SMTP connection"""
        try:
            if settings.EMAIL_USE_TLS:
                server = smtplib.SMTP(settings.EMAIL_HOST, settings.EMAIL_PORT)
                server.starttls()
            else:
                server = smtplib.SMTP_SSL(settings.EMAIL_HOST, settings.EMAIL_PORT)

            if settings.EMAIL_USERNAME and settings.EMAIL_PASSWORD:
                server.login(settings.EMAIL_USERNAME, settings.EMAIL_PASSWORD)

            return server
        except Exception as e:
            logger.error(f"Failed to connect to SMTP server: {e}")
            raise

    @staticmethod
    def send_email(
            to_email: str,
            subject: str,
            html_content: str,
            plain_text: Optional[str] = None,
            cc: Optional[List[str]] = None
    ) -> bool:
        """
        Send an email using SMTP

        Args:
            to_email: Recipient email address
            subject: Email subject
            html_content: HTML content of the email
            plain_text: Plain text version (fallback for non-HTML clients)
            cc: List of CC email addresses

        Returns:
            bool: True if email sent successfully
        """
        try:
            msg = MIMEMultipart('alternative')
            msg['Subject'] = subject
            msg['From'] = f"{settings.EMAIL_FROM_NAME} <{settings.EMAIL_FROM_ADDRESS}>"
            msg['To'] = to_email

            if cc:
                msg['Cc'] = ', '.join(cc)

            if plain_text:
                msg.attach(MIMEText(plain_text, 'plain'))
            msg.attach(MIMEText(html_content, 'html'))

            recipients = [to_email]
            if cc:
                recipients.extend(cc)

            server = EmailService._get_smtp_connection()
            server.sendmail(settings.EMAIL_FROM_ADDRESS, recipients, msg.as_string())
            server.quit()

            logger.info(f"Email sent successfully to {to_email}")
            return True

        except Exception as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            raise

    @staticmethod
    def _manage_url(appointment: Appointment) -> str:
        return f"{settings.FRONTEND_URL}/booking/manage/{appointment.cancellation_token}"

    @staticmethod
    def send_booking_confirmation(appointment: Appointment, business_name: str) -> bool:
        """Send the booking summary with the self-service cancellation link"""
        customer = appointment.customer
        when = appointment.appointment_datetime.strftime("%A %d %B %Y at %H:%M")
        manage_url = EmailService._manage_url(appointment)

        html_content = f"""
        <!DOCTYPE html>
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
            <h2 style="margin-top: 0;">Hi {customer.first_name},</h2>
            <p style="font-size: 16px;">
                Your appointment with <strong>{business_name}</strong> has been received.
            </p>
            <ul style="font-size: 16px;">
                <li>Service: {appointment.service.name}</li>
                <li>When: {when}</li>
                <li>Duration: {appointment.duration_minutes} minutes</li>
                <li>Price: {appointment.price}</li>
            </ul>
            <p style="font-size: 14px;">
                Need to cancel? <a href="{manage_url}">Manage your booking</a>.
            </p>
        </body>
        </html>
        """

        plain_text = f"""
        Hi {customer.first_name},

        Your appointment with {business_name} has been received.

        Service: {appointment.service.name}
        When: {when}
        Duration: {appointment.duration_minutes} minutes
        Price: {appointment.price}

        Need to cancel? {manage_url}
        """

        return EmailService.send_email(
            to_email=customer.email,
            subject=f"Your booking with {business_name}",
            html_content=html_content,
            plain_text=plain_text
        )

    @staticmethod
    def send_cancellation_email(appointment: Appointment, business_name: str) -> bool:
        """Tell the customer their appointment was cancelled"""
        customer = appointment.customer
        when = appointment.appointment_datetime.strftime("%A %d %B %Y at %H:%M")
        reason = appointment.cancellation_reason or ""

        html_content = f"""
        <!DOCTYPE html>
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
            <h2 style="margin-top: 0;">Hi {customer.first_name},</h2>
            <p style="font-size: 16px;">
                Your appointment with <strong>{business_name}</strong> on {when} has been cancelled.
            </p>
            <p style="font-size: 14px; color: #777;">{reason}</p>
            <p style="font-size: 14px;">
                You can book a new time at <a href="{settings.FRONTEND_URL}">{settings.FRONTEND_URL}</a>.
            </p>
        </body>
        </html>
        """

        plain_text = f"""
        Hi {customer.first_name},

        Your appointment with {business_name} on {when} has been cancelled.
        {reason}

        You can book a new time at {settings.FRONTEND_URL}
        """

        return EmailService.send_email(
            to_email=customer.email,
            subject=f"Appointment cancelled - {business_name}",
            html_content=html_content,
            plain_text=plain_text
        )

    @staticmethod
    def send_appointment_reminder(appointment: Appointment, business_name: str) -> bool:
        """Day-before reminder with the self-service cancellation link"""
        customer = appointment.customer
        when = appointment.appointment_datetime.strftime("%A %d %B %Y at %H:%M")
        manage_url = EmailService._manage_url(appointment)

        html_content = f"""
        <!DOCTYPE html>
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
            <h2 style="margin-top: 0;">See you tomorrow, {customer.first_name}</h2>
            <p style="font-size: 16px;">
                This is a reminder of your <strong>{appointment.service.name}</strong>
                appointment with <strong>{business_name}</strong> on {when}.
            </p>
            <p style="font-size: 14px;">
                Can't make it? <a href="{manage_url}">Cancel your booking</a> so someone else can take the slot.
            </p>
        </body>
        </html>
        """

        plain_text = f"""
        See you tomorrow, {customer.first_name}

        This is a reminder of your {appointment.service.name} appointment
        with {business_name} on {when}.

        Can't make it? Cancel here: {manage_url}
        """

        return EmailService.send_email(
            to_email=customer.email,
            subject=f"Reminder: your appointment with {business_name}",
            html_content=html_content,
            plain_text=plain_text
        )
