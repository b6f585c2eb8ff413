"""Transactional email adapter."""

from .client import MockEmailSender, RealEmailSender

__all__ = ["MockEmailSender", "RealEmailSender"]
