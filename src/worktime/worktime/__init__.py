"""Working-time compliance package.

Organized by feature modules (time_tracking, history) with a thin Flask
controller layer on top of plain service/repository layers.
"""
