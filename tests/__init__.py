"""
Test suite for the markpdf project.
"""
