"""
Yousign Client - Python client and CLI for the Yousign e-signature API.
"""

__version__ = "1.0.0"
__prog_name__ = "yousign"
__author__ = "Yousign Client Contributors"
