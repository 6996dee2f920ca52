"""
File Sorter - sort the files of a directory into category folders.

This package provides functionality to:
- Classify files by extension (Images, Documents, Music, Video, Archives, other)
- Walk a directory tree, skipping folders that are already category folders
- Move each file into source_root/<category>, renaming with a timestamp on collision
- Aggregate file count and size per category
- Print a summary and optionally export it as CSV or XLSX
"""

__version__ = "0.1.0"
__author__ = "File Sorter Team"
