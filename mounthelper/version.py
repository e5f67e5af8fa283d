# mounthelper/version.py - SINGLE SOURCE OF TRUTH for version string
"""
This is the ONLY place where VERSION is defined.
All other modules MUST import VERSION from here.
"""

VERSION = "1.0.0"
