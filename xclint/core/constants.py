"""
Constants
Centralised storage for fixed report strings and priority levels.
"""
PRIORITIES = (1, 2, 3)
PMD_VERSION = "oclint-0.8dev"
CLEAN_MESSAGE = "No lint violations detected"
NO_FILES_MESSAGE = "No files to examine!"
