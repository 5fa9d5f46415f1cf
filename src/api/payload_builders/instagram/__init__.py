"""Payload builders Instagram."""

from .text import build_text_message_payload

__all__ = ["build_text_message_payload"]
