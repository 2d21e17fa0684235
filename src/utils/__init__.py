"""
Utility modules for the payments service
"""
from .config_loader import MomoSettings, TelecelConfig, load_settings

__all__ = [
    'MomoSettings',
    'TelecelConfig',
    'load_settings',
]
