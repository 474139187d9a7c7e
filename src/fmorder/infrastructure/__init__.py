"""Infrastructure layer — file discovery and file I/O."""
