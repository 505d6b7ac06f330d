"""
campusnav.directory - Navigation Directory
============================================

The join/orchestration component over the image and classroom stores.
"""

from campusnav.directory.navigation_directory import NavigationDirectory, parse_payload

__all__ = ["NavigationDirectory", "parse_payload"]
