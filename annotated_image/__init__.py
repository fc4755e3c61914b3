"""
Annotated images: dots and arrows drawn over an image, with HTML and PDF export.
"""
__version__ = "0.1.0"
