# -*- coding: utf-8 -*-
"""healthtrack — habits, nutrition and fitness tracking backend."""

__version__ = "0.1.0"
