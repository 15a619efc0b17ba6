# -*- coding: utf-8 -*-
"""Stored insights and alerts derived from the user's recent data."""
