# -*- coding: utf-8 -*-
"""Achievements domain (badge catalog, unlock engine, points and levels)."""
