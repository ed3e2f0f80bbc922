"""
Core Configuration Module
Provides centralized configuration management for the entire application
"""
from .base import Settings, settings
from .mongo import MongoConfig
from .logging import LogConfig

__all__ = ['Settings', 'settings', 'MongoConfig', 'LogConfig']
