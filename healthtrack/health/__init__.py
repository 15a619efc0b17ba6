# -*- coding: utf-8 -*-
"""Health dashboard domain (measurements, goals, hydration, user stats, analytics, weekly summaries)."""
