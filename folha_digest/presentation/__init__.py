"""Presentation layer: HTTP routes"""
