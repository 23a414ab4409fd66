"""Telegram community mini-app backend."""

from .app import create_app

__all__ = ['create_app']
