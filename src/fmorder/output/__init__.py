"""Console output outside the interactive screen."""
