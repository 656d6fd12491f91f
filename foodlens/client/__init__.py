# -*- coding: utf-8 -*-
"""Client side of FoodLens: view state, local history and capture.

History and recent searches never leave the device; they live in a JSON
file under ``FOODLENS_DATA_ROOT``.
"""
