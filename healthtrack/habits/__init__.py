# -*- coding: utf-8 -*-
"""Habits domain (habits, daily logs, routines, check-ins, streak stats)."""
