"""
Configuration package for the leave management service.

Environment settings and logging setup.
"""

from leaveflow.config.logging import get_logger, setup_logging
from leaveflow.config.settings import Settings, get_settings

__all__ = ['Settings', 'get_settings', 'get_logger', 'setup_logging']
