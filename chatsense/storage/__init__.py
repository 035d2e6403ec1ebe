"""Storage - key-value persistence and user settings"""
