"""
pm - ppm command-line interface.

Pacman-style front end for installing, cleaning and listing declared plugins.
"""
