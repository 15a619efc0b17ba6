# -*- coding: utf-8 -*-
"""Recipes domain (library, search, AI generation)."""
