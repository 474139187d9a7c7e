"""Domain layer — pages, the ordered page list, front-matter parsing.

This layer depends only on stdlib and ruamel.yaml.
It must never import from infrastructure, tui, or config.
"""
