# models/__init__.py
"""
Walking access model modules.

- color_scheme: threshold / category colour classification and legends
- travel_time: aggregation of destination walking times, label formatting
"""
