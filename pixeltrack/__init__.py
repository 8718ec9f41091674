"""
Pixel Analytics - tracking pixel backend for e-commerce storefronts
"""
__version__ = "0.1.0"
