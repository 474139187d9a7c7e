"""fmorder — assign sequential ordering values in YAML front matter."""

__version__ = "0.1.0"
