# -*- coding: utf-8 -*-
"""Weight tracking domain."""
