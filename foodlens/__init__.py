# -*- coding: utf-8 -*-
"""FoodLens: AI food detector service and client."""

__version__ = "1.0.0"
