# -*- coding: utf-8 -*-
"""
Intake Wizard Application Core Module
"""

from .config import Config

__all__ = ["Config"]
