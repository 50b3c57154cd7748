"""Telegram bot package.

Command handlers, the per-chat shipping calculator session, message
templates and response formatting.
"""
