"""Directory-tree codec layer.

This package maps value trees onto files and directories and back.
It owns path navigation, leaf encoding, and variant disambiguation.
"""
