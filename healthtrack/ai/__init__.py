# -*- coding: utf-8 -*-
"""Generative-AI wrappers (Gemini chat/vision, insights, Nutritionix lookups)."""
