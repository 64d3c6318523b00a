"""
Module: __init__.py
Project: Passforge (Open Source)
License: MIT
Description:
    Blueprints Package Initializer.

    Marks the 'blueprints' directory as a Python package so the HTTP endpoints
    can be discovered and registered by the application factory.
"""
