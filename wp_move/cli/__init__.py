# wp_move/cli/__init__.py
"""Command line interface for wp-move"""
