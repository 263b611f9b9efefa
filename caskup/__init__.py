"""
caskup - Homebrew cask upgrader for ~/Applications

Upgrades the applications in the user's Applications folder that Homebrew
manages as casks, and reports what happened to each one.
"""

__version__ = "1.0.0"
