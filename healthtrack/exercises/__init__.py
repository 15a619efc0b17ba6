# -*- coding: utf-8 -*-
"""Exercise catalog (built-in and user-defined exercises)."""
