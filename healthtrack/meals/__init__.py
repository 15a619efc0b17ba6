# -*- coding: utf-8 -*-
"""Meal logging domain."""
