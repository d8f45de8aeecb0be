"""
Scheduling Module

Calendar grid logic shared by the day and week views:
- Calendar window configuration (calendar_config.py)
- Time slot generation (slots.py)
- Overlap matching between appointments and slots (overlap.py)
"""
