"""
Flask web interface.
"""
