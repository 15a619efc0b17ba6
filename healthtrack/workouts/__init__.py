# -*- coding: utf-8 -*-
"""Workout logging domain."""
