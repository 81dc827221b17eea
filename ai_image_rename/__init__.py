"""AI Image Rename - rename images with AI-generated descriptive filenames."""

from .core import format_api_error

__version__ = "0.1.0"
__author__ = "nisc"
__description__ = "AI-powered batch image renaming with concurrent processing"
