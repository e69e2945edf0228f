"""
Request and response models
"""
