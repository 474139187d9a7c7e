"""Interactive terminal session — controller, renderers, loop."""
