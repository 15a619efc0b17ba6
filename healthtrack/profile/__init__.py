# -*- coding: utf-8 -*-
"""User profile and nutrition goals."""
