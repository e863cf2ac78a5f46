"""
Documentation screenshot pipeline.

This package contains modular pieces for parsing capture markers out of
markdown, driving an authenticated browser, highlighting and ranking UI
elements, compositing arrow callouts and patching image references back
into the docs.
"""
