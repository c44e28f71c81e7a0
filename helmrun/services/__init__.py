"""
Services layer for helmrun.
"""
