"""
Supporting services: introspection, metrics, tracing
"""
