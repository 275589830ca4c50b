"""Notification channels"""
from .mailer import build_email_body, send_news_email

__all__ = ["build_email_body", "send_news_email"]
