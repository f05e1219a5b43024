"""
Infrastructure Module

Redis plumbing, serde implementations and adapter implementations.
"""
