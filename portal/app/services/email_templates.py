from datetime import datetime
from html import escape
from typing import Tuple


def invitation_email(client_name: str, setup_url: str, expires_at: datetime) -> Tuple[str, str]:
    subject = "Set up your AI chatbot account"
    html = f"""
        <h1>Welcome, {escape(client_name)}!</h1>
        <p>Your AI chatbot account is ready. Click the link below to choose a
        password and finish setting up your account:</p>
        <p><a href="{escape(setup_url)}">Set up my account</a></p>
        <p>This link expires on {expires_at.strftime("%B %d, %Y")} and can be used once.</p>
        <p>Best regards,<br>AI Chatbot Admin Team</p>
    """
    return subject, html


def recovery_email(client_name: str, recovery_url: str, purge_at: datetime) -> Tuple[str, str]:
    subject = "Your Account Deletion Request"
    html = f"""
        <h1>Account Deletion Notice</h1>
        <p>Dear {escape(client_name)},</p>
        <p>Your account has been scheduled for deletion on {purge_at.strftime("%B %d, %Y")}.</p>
        <p>If you wish to recover your account, you can do so by clicking the link below:</p>
        <p><a href="{escape(recovery_url)}">Recover My Account</a></p>
        <p>If you don't want to recover your account, no action is needed.</p>
        <p>Best regards,<br>AI Chatbot Admin Team</p>
    """
    return subject, html
