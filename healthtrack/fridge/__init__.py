# -*- coding: utf-8 -*-
"""Smart fridge domain (inventory, expiration tracking)."""
