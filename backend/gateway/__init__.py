"""
Image gateway: stores uploaded images in Google Drive and proxies them back.
"""
__version__ = "0.1.0"
