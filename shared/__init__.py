"""
Tabula Shared Module
====================

Configuration, logging and console infrastructure shared by the Tabula
tools.
"""

from shared.config import TabulaConfig, get_config

__all__ = ["TabulaConfig", "get_config"]
