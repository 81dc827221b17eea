#!/usr/bin/env python3
"""AI Image Rename - rename images with AI-generated descriptive filenames."""

from ai_image_rename.cli import main

if __name__ == "__main__":
    main()
