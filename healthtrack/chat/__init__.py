# -*- coding: utf-8 -*-
"""Chat history with the AI nutritionist."""
