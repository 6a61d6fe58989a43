"""
core package
------------
Logging, exceptions, paths, settings and run statistics shared by the
import pipeline and CLI.
"""
